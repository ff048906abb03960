# models/__init__.py
from .user import LoginRequest, SignupRequest, ChangePasswordRequest, CreateUserRequest
from .store import CreateStoreRequest
from .rating import RatingRequest

__all__ = [
    "LoginRequest",
    "SignupRequest",
    "ChangePasswordRequest",
    "CreateUserRequest",
    "CreateStoreRequest",
    "RatingRequest",
]
