from .list_operators import ListOperatorsUseCase
from .update_operator_role import UpdateOperatorRoleUseCase
from .set_operator_active import SetOperatorActiveUseCase

__all__ = [
    "ListOperatorsUseCase",
    "UpdateOperatorRoleUseCase",
    "SetOperatorActiveUseCase",
]
