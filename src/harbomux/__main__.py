"""Allow running harbomux as a module: python -m harbomux"""

from harbomux.cli import cli_main

if __name__ == "__main__":
    cli_main()
