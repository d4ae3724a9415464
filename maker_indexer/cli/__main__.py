# maker_indexer/cli/__main__.py

"""
Usage: python -m maker_indexer.cli [command] [options]
"""

from maker_indexer.cli.commands import cli


if __name__ == '__main__':
    cli()
