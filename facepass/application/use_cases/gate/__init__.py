from .verify_at_gate import VerifyAtGateUseCase

__all__ = [
    "VerifyAtGateUseCase",
]
