"""
MediBook

A FastAPI backend for booking medical appointments: doctors, patients,
JWT authentication, booking conflict checks and PDF prescriptions.
"""

__version__ = "1.0.0"
