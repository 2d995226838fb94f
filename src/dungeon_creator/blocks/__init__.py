from .block import Block, PieceInstance

__all__ = ["Block", "PieceInstance"]
