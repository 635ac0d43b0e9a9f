#!/usr/bin/env python3

import click

from srpmimport.commands.import_cmd import import_handler
from srpmimport.commands.config import config_cmd


@click.group()
@click.version_option(package_name='srpmimport')
def cli():
    """srpmimport - Import source RPMs into git working trees.

    Spec files land in SPECS/, sources and patches in SOURCES/. Archive
    sources are written but kept out of git via .gitignore.
    """
    pass


cli.add_command(import_handler, name='import')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
