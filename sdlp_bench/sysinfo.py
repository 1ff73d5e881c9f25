"""
System information capture for reproducible benchmark results.
"""

import platform
import sys
from datetime import datetime, timezone
from typing import Any, Dict

import psutil

from .models import Environment


def get_timestamp() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds')


def capture_environment(sdlp_version: str) -> Environment:
    """
    Describe the host for the suite header.

    Args:
        sdlp_version: Version of the protocol implementation under test
    """
    return Environment(
        runtime=f"{platform.python_implementation()} {platform.python_version()}",
        platform=sys.platform,
        arch=platform.machine() or "unknown",
        sdlp_version=sdlp_version,
    )


def capture_system_info() -> Dict[str, Any]:
    """Capture host details for the run manifest."""
    return {
        "timestamp": get_timestamp(),
        "system": get_system_info(),
        "python": get_python_info(),
        "hardware": get_hardware_info(),
        "libraries": get_library_versions(),
    }


def get_system_info() -> Dict[str, Any]:
    return {
        "platform": platform.platform(),
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
        "processor": platform.processor(),
    }


def get_python_info() -> Dict[str, Any]:
    return {
        "version": sys.version,
        "implementation": platform.python_implementation(),
        "executable": sys.executable,
    }


def get_hardware_info() -> Dict[str, Any]:
    """CPU and memory figures from psutil."""
    cpu_freq = psutil.cpu_freq()
    memory = psutil.virtual_memory()
    hardware = {
        "cpu": {
            "physical_cores": psutil.cpu_count(logical=False),
            "logical_cores": psutil.cpu_count(logical=True),
            "max_frequency_mhz": cpu_freq.max if cpu_freq else None,
        },
        "memory": {
            "total_gb": round(memory.total / (1024 ** 3), 2),
            "available_gb": round(memory.available / (1024 ** 3), 2),
        },
    }

    # CPU model is only exposed on Linux
    try:
        with open('/proc/cpuinfo', 'r') as f:
            for line in f:
                if 'model name' in line:
                    hardware["cpu_model"] = line.split(':', 1)[1].strip()
                    break
    except (FileNotFoundError, PermissionError):
        pass

    return hardware


def get_library_versions() -> Dict[str, str]:
    import brotli
    import cryptography
    import matplotlib
    import numpy

    return {
        "brotli": getattr(brotli, "__version__", "unknown"),
        "cryptography": cryptography.__version__,
        "psutil": psutil.__version__,
        "matplotlib": matplotlib.__version__,
        "numpy": numpy.__version__,
    }
