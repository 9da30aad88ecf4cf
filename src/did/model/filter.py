# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict


class Filter(TypedDict):
    keyword: Optional[str]
    project: Optional[str]
    tags: Optional[list[str]]
