"""
Configuration Management for Training EMR

Handles application configuration, environment variables,
and logging setup for the classroom sandbox.
"""

import os
import logging
from typing import Dict, Any
from pathlib import Path

logger = logging.getLogger(__name__)

def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')

def get_app_config() -> Dict[str, Any]:
    """
    Get application configuration settings

    Returns:
        Dictionary containing app configuration
    """
    try:
        config = {
            'app_name': os.getenv('EMR_APP_NAME', 'Training EMR'),
            'app_version': os.getenv('APP_VERSION', '1.0.0'),
            'environment': os.getenv('ENVIRONMENT', 'development'),
            'log_level': get_log_level(),
            'data_dir': os.getenv('EMR_DATA_DIR', '.emr_data'),
            'practice_batch_size': int(os.getenv('EMR_PRACTICE_BATCH', '5')),
        }

        return config

    except Exception as e:
        logger.error(f"Error loading app configuration: {e}")
        return {
            'app_name': 'Training EMR',
            'environment': 'development',
            'data_dir': '.emr_data',
            'practice_batch_size': 5,
        }

def get_auth_config() -> Dict[str, Any]:
    """
    Get sign-up / sign-in rules

    Returns:
        Dictionary containing authentication configuration
    """
    try:
        return {
            'min_password_length': int(os.getenv('EMR_MIN_PASSWORD_LENGTH', '8')),
        }
    except Exception as e:
        logger.error(f"Error loading auth configuration: {e}")
        return {'min_password_length': 8}

def get_seed_config() -> Dict[str, Any]:
    """
    Get demo account and starter data settings

    Returns:
        Dictionary containing seed configuration
    """
    try:
        return {
            'seed_demo': _env_flag('EMR_SEED_DEMO', 'true'),
            'demo_name': os.getenv('EMR_DEMO_NAME', 'Demo Instructor'),
            'demo_email': os.getenv('EMR_DEMO_EMAIL', 'demo@classroom.edu'),
            'demo_password': os.getenv('EMR_DEMO_PASSWORD', 'demo1234'),
            'starter_patients': int(os.getenv('EMR_STARTER_PATIENTS', '2')),
        }
    except Exception as e:
        logger.error(f"Error loading seed configuration: {e}")
        return {
            'seed_demo': True,
            'demo_name': 'Demo Instructor',
            'demo_email': 'demo@classroom.edu',
            'demo_password': 'demo1234',
            'starter_patients': 2,
        }

def is_development() -> bool:
    """Check if running in development environment"""
    return os.getenv('ENVIRONMENT', 'development').lower() == 'development'

def get_log_level() -> str:
    """Get configured log level"""
    level = os.getenv('LOG_LEVEL', 'INFO').upper()
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    return level if level in valid_levels else 'INFO'

def setup_logging() -> None:
    """Setup application logging configuration"""
    try:
        log_level = get_log_level()
        log_format = os.getenv('LOG_FORMAT', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        log_file = os.getenv('EMR_LOG_FILE')

        handlers = [logging.StreamHandler()]
        if log_file:
            handlers.append(logging.FileHandler(log_file))

        logging.basicConfig(
            level=getattr(logging, log_level),
            format=log_format,
            handlers=handlers
        )

        # Streamlit's file watcher is chatty at DEBUG
        if is_development():
            logging.getLogger('watchdog').setLevel(logging.WARNING)
            logging.getLogger('faker').setLevel(logging.WARNING)

        logger.info(f"Logging configured - Level: {log_level}, Environment: {os.getenv('ENVIRONMENT', 'development')}")

    except Exception as e:
        print(f"Error setting up logging: {e}")

def load_environment_file(env_file: str = '.env') -> bool:
    """
    Load environment variables from file

    Args:
        env_file: Path to environment file

    Returns:
        True if file was loaded successfully
    """
    try:
        env_path = Path(env_file)

        if not env_path.exists():
            logger.debug(f"Environment file not found: {env_file}")
            return False

        with open(env_path, 'r') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#') and '=' in line:
                    key, value = line.split('=', 1)
                    os.environ.setdefault(key.strip(), value.strip())

        logger.info(f"Environment file loaded: {env_file}")
        return True

    except Exception as e:
        logger.error(f"Error loading environment file: {e}")
        return False

def load_app_config() -> Dict[str, Any]:
    """
    Load and initialize application configuration

    This function:
    - Loads environment variables in development
    - Sets up logging
    - Returns the complete app configuration

    Returns:
        Dictionary containing application configuration
    """
    if is_development():
        load_environment_file()

    setup_logging()

    config = {
        'app': get_app_config(),
        'auth': get_auth_config(),
        'seed': get_seed_config(),
    }

    logger.debug("Application configuration loaded")
    return config
