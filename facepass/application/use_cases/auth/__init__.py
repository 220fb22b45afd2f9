from .register_operator import RegisterOperatorUseCase
from .login_operator import LoginOperatorUseCase
from .get_current_operator import GetCurrentOperatorUseCase

__all__ = [
    "RegisterOperatorUseCase",
    "LoginOperatorUseCase",
    "GetCurrentOperatorUseCase",
]
