"""
Oracle identity: name, version, banner.
"""

__codename__ = "ORACLE"
__version__ = "0.4.0"
__tagline__ = "Project-aware answers, plans and reviews from your LLM CLI"

BANNER = r"""
   ___  ____      _    ____ _     _____
  / _ \|  _ \    / \  / ___| |   | ____|
 | | | | |_) |  / _ \| |   | |   |  _|
 | |_| |  _ <  / ___ \ |___| |___| |___
  \___/|_| \_\/_/   \_\____|_____|_____|
"""
