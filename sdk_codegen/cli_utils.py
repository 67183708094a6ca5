"""
CLI utilities for command line reconstruction.
"""

from pathlib import Path

import click

PROGRAM = "sdk_codegen"


def _format_value(value) -> str:
    # File paths are shown by name only
    if isinstance(value, (str, Path)):
        path_obj = Path(str(value))
        return path_obj.name if path_obj.exists() else str(value)
    return str(value)


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct the command line of the running Click command.

    Args:
        click_command: Click command object for introspection

    Returns:
        The command line, with options left at their default omitted
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        return PROGRAM

    if not cli_args:
        return PROGRAM

    arguments = []
    options = []
    for param in click_command.params:
        value = cli_args.get(param.name)
        if not value:
            continue

        if isinstance(param, click.Argument):
            arguments.append(_format_value(value))
        elif isinstance(param, click.Option):
            if value == param.default:
                continue
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            elif isinstance(value, (tuple, list)):
                for item in value:
                    options.extend([flag, _format_value(item)])
            else:
                options.extend([flag, _format_value(value)])

    return " ".join([PROGRAM, *arguments, *options])
