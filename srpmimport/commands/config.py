"""
Config commands for srpmimport.

Shows the effective settings (defaults, then the config file, then
SRPMIMPORT_* environment overrides) and checks that the tool settings
an import would use are valid.
"""

import click
import json
import shutil
import sys

from rich.console import Console

from ..config import load_config, get_config_path
from ..exit_codes import ConfigError, TOOL_ERROR, get_exit_code_for_exception
from ..services.import_service import parse_timeout


@click.group('config')
def config_cmd():
    """Inspect srpmimport settings."""


@config_cmd.command('show')
@click.option('--pretty', is_flag=True, help='Indented, highlighted JSON')
@click.option('--path', 'show_path', is_flag=True, help='Print only the config file location')
def show_config(pretty: bool, show_path: bool):
    """
    Print the effective configuration as one JSON line.

    Examples:

        srpmimport config show
        SRPMIMPORT_TOOLS_TIMEOUT_SECONDS=30 srpmimport config show --pretty
    """
    if show_path:
        print(json.dumps({'config_path': str(get_config_path())}))
        return

    config = load_config()
    if pretty:
        Console().print_json(data=config)
    else:
        print(json.dumps(config, ensure_ascii=False))


@config_cmd.command('check')
def check_config():
    """
    Validate tool settings before an import.

    Reports where rpm2cpio, rpm and git resolve on PATH and whether the
    timeouts are usable. Exits non-zero on an invalid timeout or a
    missing tool.
    """
    config = load_config()
    tools = config.get('tools', {})
    git = config.get('git', {})

    try:
        parse_timeout(tools.get('timeout_seconds'), 'tools.timeout_seconds')
        parse_timeout(git.get('timeout_seconds', 60), 'git.timeout_seconds')
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(get_exit_code_for_exception(e))

    missing = []
    for name in (tools.get('rpm2cpio', 'rpm2cpio'), tools.get('rpm', 'rpm'), 'git'):
        location = shutil.which(name)
        print(json.dumps({'tool': name, 'path': location}))
        if location is None:
            missing.append(name)

    if missing:
        print(f"Error: not found on PATH: {', '.join(missing)}", file=sys.stderr)
        sys.exit(TOOL_ERROR)
