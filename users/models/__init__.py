from .custom_user import CustomUser
from .patient import Patient

__all__ = [
    "CustomUser",
    "Patient",
]
