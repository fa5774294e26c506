"""
IPLens - Offline IP Address Information

Entry point for running as a module:
    python -m iplens <ipaddr>
"""

from .cli import main

if __name__ == '__main__':
    main()
