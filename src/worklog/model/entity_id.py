# SPDX-License-Identifier: MIT

import uuid

type EntityId = str


def generate_entity_id(prefix: str) -> EntityId:
    return f"{prefix}-{uuid.uuid4()}"


def carryover_task_id(persistent_id: EntityId, date_str: str) -> EntityId:
    return f"carryover-{persistent_id}-{date_str}"
