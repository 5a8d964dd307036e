# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from planboard import state as app_state
from planboard.id_map import clear_id_map_if_required
from planboard.repository.category import CATEGORY_REPO
from planboard.template.category import get_category_template
from planboard.terminal.custom_typer import AliasedTyperGroup
from planboard.terminal.error import report_errors
from planboard.view.views import category as category_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    color: Annotated[
        Optional[str], typer.Option("--color", "-col", help="rich color name")
    ] = None,
) -> None:
    with report_errors():
        category = get_category_template(app_state.get_clock())
        category["name"] = name
        category["color"] = color
        CATEGORY_REPO.save_new_category(category)

    clear_id_map_if_required()
    category_report.categories_view(CATEGORY_REPO.get_all_categories())


@app.command("list, ls")
def list_categories() -> None:
    clear_id_map_if_required()
    category_report.categories_view(CATEGORY_REPO.get_all_categories())
