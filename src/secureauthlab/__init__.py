"""
SecureAuth Lab
An educational simulator of credential brute-force attacks and the defenses
that stop them.

Modules:
    - analyzer: Entropy, strength, pattern and crack-time analysis
    - defense: Max-attempts / lockout policy and attempt pacing
    - generators: Dictionary, hybrid and adaptive brute-force candidates
    - engine: Phased simulation engine with streaming progress
    - report: Educational result reports
"""

# Version is managed by setuptools_scm from git tags
# Auto-generated to _version.py on install
try:
    from secureauthlab._version import __version__, __version_tuple__
except ImportError:
    # Fallback for development without install or outside git repo
    __version__ = "0.1.0.dev0"
    __version_tuple__ = (0, 1, 0, "dev0")

__author__ = "SecureAuth Lab Team"

# Lazy imports to avoid circular dependencies and speed up CLI startup
def __getattr__(name):
    """Lazy import modules on first access."""
    if name == "Config":
        from secureauthlab.config import Config
        return Config
    elif name == "DefenseConfig":
        from secureauthlab.config import DefenseConfig
        return DefenseConfig
    elif name == "SimulationEngine":
        from secureauthlab.engine import SimulationEngine
        return SimulationEngine
    elif name == "start_simulation":
        from secureauthlab.engine import start_simulation
        return start_simulation
    elif name == "analyze_password":
        from secureauthlab.analyzer import analyze_password
        return analyze_password
    elif name == "setup_logging":
        from secureauthlab.utils import setup_logging
        return setup_logging
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "Config",
    "DefenseConfig",
    "SimulationEngine",
    "start_simulation",
    "analyze_password",
    "setup_logging",
    "__version__",
    "__version_tuple__",
]
