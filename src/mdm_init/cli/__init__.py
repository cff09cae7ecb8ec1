"""CLI package for the MDM database bootstrap.

Execute via:
  python -m mdm_init.cli <command> [options]

Or, once installed, through the console script:
  mdm-init <command>
"""

from .main import main  # re-export for python -m mdm_init.cli

__all__ = ["main"]
