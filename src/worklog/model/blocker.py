# SPDX-License-Identifier: MIT

from typing import TypedDict

from worklog.model.entity_id import EntityId


class Blocker(TypedDict):
    id: EntityId
    description: str
    resolved: bool
