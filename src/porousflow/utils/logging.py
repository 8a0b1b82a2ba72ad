""" Logging functionality for PorousFlow.

Logging is controlled by the configuration file porousflow.cfg, which should be
placed in the current working directory (where the python script is initiated).
All logging-related information is located in a section in the cfg-file with
heading logging; see sample file below.

By default, logging is switched off. It can be turned on by setting the keyword
'active' to True.

Kernels are evaluated once per node and trial function on every element, so timing
every call quickly becomes expensive. To log only parts of the code, functions are
classified into the following (overlapping) categories

    all: Used to log all methods.
    assembly: Local element loops of kernels.
    materials: Evaluation of nodal material laws.
    numerics: Remaining numerical utilities.

Example logging section of porousflow.cfg:

    [logging]
    # Activate logging. Without this, the rest of the section has no effect
    active: True
    # To only log specific sections, use e.g.
    sections: assembly
    # multiple sections are separated by commas:
    sections: assembly, materials

"""
import functools
import logging
import time
from typing import Dict, Sequence

import porousflow as pf

__all__ = ["time_logger"]


config: Dict = pf.config.get("logging", {})
raw_sections = config.get("sections", "all")
active_sections = [s.strip().lower() for s in raw_sections.split(",")]
logger_is_active = config.get("active", "false").strip().lower() == "true"
always_log = "all" in active_sections

t_logger = logging.getLogger("Timer")
t_logger.setLevel(logging.INFO)

if logger_is_active and not t_logger.hasHandlers():
    # Add handler to write to file.
    time_handler = logging.FileHandler("PorousFlowTimings.log")
    time_handler.setLevel(logging.INFO)
    time_handler.setFormatter(logging.Formatter("%(message)s"))
    t_logger.addHandler(time_handler)


def time_logger(sections: Sequence[str]):
    """A decorator that measures elapsed time for a function.

    Parameters:
        sections: Logging sections the decorated function belongs to. The function
            is timed if any of them is listed in the configuration file, or if the
            configuration asks for all sections.

    """

    # The double nested function is needed to allow decorators with arguments.
    def inner_func(func):
        @functools.wraps(func)
        def log_time(*args, **kwargs):
            if not logger_is_active:
                return func(*args, **kwargs)
            elif always_log or any(s in active_sections for s in sections):
                name = f"{func.__qualname__} in module {func.__module__}."
                t_logger.log(level=logging.INFO, msg=f"Calling {name}")

                start_time = time.perf_counter()
                value = func(*args, **kwargs)
                run_time = time.perf_counter() - start_time

                t_logger.log(
                    level=logging.INFO,
                    msg=f"Finished {name} Elapsed time: {run_time:.8f} s",
                )
                return value
            else:
                return func(*args, **kwargs)

        return log_time

    return inner_func
