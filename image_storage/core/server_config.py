"""
Server Configuration
====================
Uvicorn server configuration for development and production.
"""

from typing import Dict, Any

from image_storage.core.config import settings


def get_uvicorn_config() -> Dict[str, Any]:
    """
    Get Uvicorn server configuration based on environment

    Returns:
        Dict[str, Any]: Uvicorn configuration parameters
    """
    config = {
        "app": "image_storage.main:app",
        "host": settings.API_HOST,
        "port": settings.API_PORT,
        "log_config": None,  # We use our custom logging
    }

    if settings.is_development:
        config.update({
            "reload": True,
            "reload_dirs": ["image_storage"],
            "log_level": "debug",
            "access_log": True,
            "use_colors": True,
        })
    else:
        config.update({
            "reload": False,
            "workers": settings.API_WORKERS,
            "log_level": "info",
            "access_log": True,
            "use_colors": False,
            "proxy_headers": True,  # Trust X-Forwarded-* headers
            "forwarded_allow_ips": "*",
            "timeout_keep_alive": 5,
        })

    return config
