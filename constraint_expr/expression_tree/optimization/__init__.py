"""Node allocation for expression trees."""

from .memory_pool import NodeArena, get_global_arena, free_global_arena, reset_global_arena

__all__ = ['NodeArena', 'get_global_arena', 'free_global_arena', 'reset_global_arena']
