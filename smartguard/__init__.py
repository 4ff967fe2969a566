"""SmartGuard — lexical vulnerability scanner for Solidity smart contracts."""

__app_name__ = "smartguard"
__version__ = "0.1.0"
