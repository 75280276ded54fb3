""" Logging functionality for equilpy.

Timing logs are controlled by the configuration file equilpy.cfg, which should be
placed in the current working directory (where the python script is initiated).
All loging-related information is located in a section in the cfg-file with
heading logging; see sample file below.

By default, timing is switched off. It can be turned on by setting the keyword
'active' to True.

Timing can be time consuming if applied to functions called many times: The residual
assembly is typically called once per Newton iteration of an external solver, hence
the overhead is only relevant for very small systems. To log only parts of the code,
all timed functions are classified as relevant for the following (overlapping)
categories

    all: Used to log all methods.
    assembly: Assembly of residuals and Jacobians of equilibrium systems.
    models: Set-up and compilation of thermodynamic models.
    verification: Numerical checks such as finite-difference Jacobians.

Example logging section of equilpy.cfg:

    [logging]
    # Activate logging. Without this, the rest of the section has no effect
    active: True
    # To only log specific sections, use e.g.
    sections: assembly
    # multiple sections are separated by commas:
    sections: models, verification

Ordinary log records of the package are emitted through module-level loggers obtained
with :func:`logging.getLogger` and are configured by the user as usual.

"""
import functools
import inspect
import logging
import time
from pathlib import Path
from typing import Dict

import equilpy as ep

__all__ = ["time_logger"]


# Try to access configuration information, as activated by the import of equilpy
try:
    config: Dict = ep.config["logging"]  # type: ignore
    raw_sections = config.get("sections", "all")
    active_sections = [s.strip().lower() for s in raw_sections.split(",")]
    logger_is_active = config["active"].strip().lower() == "true"
    always_log = "all" in active_sections

except KeyError:
    config = {}
    active_sections = ["all"]
    logger_is_active = False
    always_log = True

t_logger = logging.getLogger("Timer")
t_logger.setLevel(logging.INFO)


if logger_is_active and not t_logger.hasHandlers():
    # Add handler to write to file.
    time_handler = logging.FileHandler(config.get("file", "EquilpyTimings.log"))
    time_handler.setLevel(logging.INFO)
    time_formatter = logging.Formatter("%(message)s")
    time_handler.setFormatter(time_formatter)
    t_logger.addHandler(time_handler)

# Number of path parts up to the 'src' directory above the equilpy package. Stripped
# from file names in timing records.
_ROOT_DEPTH = len(Path(__file__).parents[2].parts)


def _is_timed(sections: list[str]) -> bool:
    """Returns True if timing is activated for any of the given sections."""
    if not logger_is_active:
        return False
    return always_log or any(s in active_sections for s in sections)


def time_logger(sections):
    """Decorator timing a function and writing the elapsed time to the ``Timer``
    logger, if timing is activated for one of ``sections`` in ``equilpy.cfg``."""

    def decorator(func):
        @functools.wraps(func)
        def timed(*args, **kwargs):
            if not _is_timed(sections):
                return func(*args, **kwargs)

            fn = Path(*Path(inspect.getfile(func)).parts[_ROOT_DEPTH:])
            name = f"{func.__qualname__} ({fn})"
            t_logger.info(f"Calling {name}")
            start = time.perf_counter()
            value = func(*args, **kwargs)
            t_logger.info(
                f"Finished {name}, elapsed time: {time.perf_counter() - start:.8f} s"
            )
            return value

        return timed

    return decorator
