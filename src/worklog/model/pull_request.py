# SPDX-License-Identifier: MIT

from typing import TypedDict

from worklog.model.entity_id import EntityId


class PullRequest(TypedDict):
    id: EntityId
    url: str
    status: str
