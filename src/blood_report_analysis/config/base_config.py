# ============================================================================
# src/blood_report_analysis/config/base_config.py
# ============================================================================
"""
Base Configuration
- .env loading
- Project root
"""

from pathlib import Path

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent.parent.parent


def load_env_file() -> bool:
    """
    Load .env file if it exists.

    Looks in the project root first, then the current working directory.
    Values already present in the environment are not overridden.
    """
    env_path = PROJECT_ROOT / '.env'
    if env_path.exists():
        load_dotenv(env_path)
        return True

    cwd_env = Path.cwd() / '.env'
    if cwd_env.exists():
        load_dotenv(cwd_env)
        return True

    return False
