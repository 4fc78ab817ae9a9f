from .game2048 import Game2048Env

__all__ = ["Game2048Env"]
