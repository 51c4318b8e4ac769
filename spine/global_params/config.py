"""Configuration management for the SAT back end and project directories.

The SAT engine name and the default chunk size can be overridden through the
``SPINE_SAT_SOLVER`` and ``SPINE_CHUNK_SIZE`` environment variables.
"""
import logging
import os
from pathlib import Path
from typing import Optional

from pysat.solvers import SolverNames

logger = logging.getLogger(__name__)

DEFAULT_SAT_SOLVER = "glucose4"
DEFAULT_CHUNK_SIZE = 20


class ConfigRegistry(type):
    """Metaclass implementing singleton pattern for GlobalConfig.

    Ensures only one instance of GlobalConfig exists throughout the application.
    """
    _instance = None

    def __call__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


def is_sat_solver_available(name: str) -> bool:
    """Check whether PySAT knows a SAT engine under the given name.

    Args:
        name: Engine name or alias, e.g. ``glucose4``, ``g4`` or ``cadical153``.

    Returns:
        True if ``name`` is one of the aliases listed in ``SolverNames``.
    """
    for key, aliases in vars(SolverNames).items():
        if key.startswith("_") or not isinstance(aliases, (tuple, list)):
            continue
        if name in aliases:
            return True
    return False


class GlobalConfig(metaclass=ConfigRegistry):
    """Global configuration manager for the SAT engine and project paths.

    Attributes:
        sat_solver: Name of the PySAT engine used by new solver instances.
        default_chunk_size: Chunk size used by the chunking algorithm when the
            caller does not provide one.
    """

    def __init__(self):
        """Initialize the configuration from the environment."""
        self.sat_solver: str = DEFAULT_SAT_SOLVER
        self.default_chunk_size: int = DEFAULT_CHUNK_SIZE
        self._load_environment()

    def _load_environment(self) -> None:
        env_solver = os.environ.get("SPINE_SAT_SOLVER")
        if env_solver:
            if is_sat_solver_available(env_solver):
                self.sat_solver = env_solver
            else:
                logger.warning("Ignoring unknown SAT solver in SPINE_SAT_SOLVER: %s", env_solver)

        env_chunk = os.environ.get("SPINE_CHUNK_SIZE")
        if env_chunk:
            try:
                chunk = int(env_chunk)
            except ValueError:
                chunk = 0
            if chunk > 0:
                self.default_chunk_size = chunk
            else:
                logger.warning("Ignoring invalid SPINE_CHUNK_SIZE: %s", env_chunk)

    def set_sat_solver(self, name: str) -> None:
        """Set the PySAT engine used by solvers created from now on.

        Args:
            name: Name of the engine.

        Raises:
            ValueError: If PySAT does not know the engine.
        """
        if not is_sat_solver_available(name):
            raise ValueError(f"Unknown SAT solver: {name}")
        self.sat_solver = name

    def set_default_chunk_size(self, size: int) -> None:
        """Set the default chunk size of the chunking algorithm.

        Raises:
            ValueError: If ``size`` is not positive.
        """
        if size <= 0:
            raise ValueError(f"Chunk size must be positive, got {size}")
        self.default_chunk_size = size

    def resolve_sat_solver(self, name: Optional[str] = None) -> str:
        """Return ``name`` if given (after validation), else the configured engine."""
        if name is None:
            return self.sat_solver
        if not is_sat_solver_available(name):
            raise ValueError(f"Unknown SAT solver: {name}")
        return name

    @property
    def project_root(self) -> Path:
        """Get the root directory of the project."""
        return Path(__file__).parent.parent.parent

    @property
    def benchmarks_path(self) -> Path:
        """Get the directory holding the bundled DIMACS instances."""
        return Path(__file__).parent.parent / "tests" / "data"


global_config = GlobalConfig()

PROJECT_ROOT = global_config.project_root
BENCHMARKS_PATH = global_config.benchmarks_path
