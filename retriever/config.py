from pathlib import Path
from typing import Optional
import os

class Config:
    """Global configuration"""
    
    # Explorer API keys (unset keys are sent empty; keyless explorers ignore them)
    ETHERSCAN_API_KEY: Optional[str] = os.environ.get('ETHERSCAN_API_KEY')
    SCROLLSCAN_API_KEY: Optional[str] = os.environ.get('SCROLLSCAN_API_KEY')
    MERLINSCAN_API_KEY: Optional[str] = os.environ.get('MERLINSCAN_API_KEY')
    
    # Settings
    REQUEST_TIMEOUT: float = float(os.environ.get('REQUEST_TIMEOUT', '30'))
    REQUEST_DELAY: float = float(os.environ.get('REQUEST_DELAY', '0.2'))  # between batch jobs
    
    # Output directories
    OUTPUT_DIR: Path = Path(os.environ.get('OUTPUT_DIR', './output'))
    LOGS_DIR: Path = Path(os.environ.get('LOGS_DIR', 'retriever/logs'))
    LOG_TO_FILE: bool = os.environ.get('LOG_TO_FILE', 'false').lower() in ('true', '1', 'yes')
    
    @classmethod
    def reload(cls):
        """Re-read settings from the environment (after load_dotenv)"""
        cls.ETHERSCAN_API_KEY = os.environ.get('ETHERSCAN_API_KEY')
        cls.SCROLLSCAN_API_KEY = os.environ.get('SCROLLSCAN_API_KEY')
        cls.MERLINSCAN_API_KEY = os.environ.get('MERLINSCAN_API_KEY')
        cls.REQUEST_TIMEOUT = float(os.environ.get('REQUEST_TIMEOUT', '30'))
        cls.REQUEST_DELAY = float(os.environ.get('REQUEST_DELAY', '0.2'))
        cls.OUTPUT_DIR = Path(os.environ.get('OUTPUT_DIR', './output'))
        cls.LOGS_DIR = Path(os.environ.get('LOGS_DIR', 'retriever/logs'))
        cls.LOG_TO_FILE = os.environ.get('LOG_TO_FILE', 'false').lower() in ('true', '1', 'yes')
    
    @classmethod
    def api_keys(cls) -> dict:
        """API key per explorer family, keyed by ProviderKind value"""
        return {
            'etherscan': cls.ETHERSCAN_API_KEY,
            'scrollscan': cls.SCROLLSCAN_API_KEY,
            'merlinscan': cls.MERLINSCAN_API_KEY,
        }
