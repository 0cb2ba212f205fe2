import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

from retriever.config import Config

def setup_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure logging. Safe to call repeatedly: the console handler is added
    once, the file handler as soon as Config.LOG_TO_FILE is on.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    
    # Console
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console = logging.StreamHandler()
        console.setLevel(logging.INFO)
        console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(console)
    
    # File
    if Config.LOG_TO_FILE and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        log_dir = log_dir or Config.LOGS_DIR
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        file_handler = logging.FileHandler(log_dir / f'{name}_{timestamp}.log')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(file_handler)
    
    return logger
