"""
Logging Setup
=============
Console (and optional file) logging for scripts and demos.
Library modules only create loggers; handlers are attached here.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the root logger once per process.
    
    Args:
        level: Logging level name or number
        log_file: Optional path of a file to log to as well as stdout
        
    Returns:
        The root logger
    """
    root_logger = logging.getLogger()
    if getattr(root_logger, "_medianstream_logging_configured", False):
        return root_logger
    
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    
    root_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(path))
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    
    setattr(root_logger, "_medianstream_logging_configured", True)
    return root_logger
