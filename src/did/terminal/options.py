# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

YesterdayOption = Annotated[
    bool, typer.Option("--yesterday", "-y", help="Yesterday's entries")
]
WeekOption = Annotated[bool, typer.Option("--week", "-w", help="This week")]
LastWeekOption = Annotated[bool, typer.Option("--last-week", help="Last week")]
MonthOption = Annotated[bool, typer.Option("--month", "-m", help="This month")]
LastMonthOption = Annotated[bool, typer.Option("--last-month", help="Last month")]
LastDaysOption = Annotated[
    Optional[int],
    typer.Option("--last", "-l", min=1, help="The last N days, today included"),
]
FromOption = Annotated[
    Optional[str],
    typer.Option("--from", help="valid inputs: YYYY-MM-DD, DD/MM/YYYY"),
]
ToOption = Annotated[
    Optional[str],
    typer.Option("--to", help="valid inputs: YYYY-MM-DD, DD/MM/YYYY"),
]
ProjectOption = Annotated[
    Optional[str],
    typer.Option("--project", "-p", help="Only entries for this project"),
]
TagOption = Annotated[
    Optional[list[str]],
    typer.Option("--tag", "-t", help="accepts multiple tag options, all must match"),
]
