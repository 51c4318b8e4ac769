"""Global parameters module for spine.

This module provides access to the process-wide configuration used by the solver
wrappers and the backbone engine.
"""
from .config import global_config, PROJECT_ROOT, BENCHMARKS_PATH
