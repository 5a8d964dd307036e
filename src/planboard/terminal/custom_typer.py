# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core


class AliasedTyperGroup(typer.core.TyperGroup):
    """Group whose commands are named "name, alias" and resolve by either part"""

    _ALIAS_SEPARATOR = re.compile(r"\s*,\s*")

    def resolve_name(self, name: str) -> str:
        for full_name in self.commands:
            if name in self._ALIAS_SEPARATOR.split(full_name):
                return full_name
        return name

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.resolve_name(cmd_name))

    def add_command(self, cmd: click.Command, name: Optional[str] = None) -> None:
        full_name = name or cmd.name or ""
        # an alias of a registered command is not a command of its own
        if self.resolve_name(full_name) != full_name:
            return
        super().add_command(cmd, name)


class OrderedAliasedTyperGroup(AliasedTyperGroup):
    """Lists the top-level groups in workflow order"""

    desired_order = (
        "task, t",
        "board, b",
        "category, cat",
        "config, c",
    )

    def list_commands(self, ctx: click.Context) -> list[str]:
        def position(name: str) -> int:
            if name in self.desired_order:
                return self.desired_order.index(name)
            return len(self.desired_order)

        # sorted is stable, so unlisted groups keep registration order
        return sorted(self.commands, key=position)
