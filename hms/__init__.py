"""
Hospital Management System

A FastAPI-based backend for running a hospital: employees and doctors,
ward occupancy, appointment booking, the pharmacy counter and billing.
"""

__version__ = "2.0.0"
