"""Identifier and flag types shared by both persistence backends."""
from __future__ import annotations

import uuid
from typing import Literal, NewType

# Store-native key in string form (row id or ObjectId hex). Never exposed
# outside the admin tooling.
InternalKey = NewType("InternalKey", str)

# Stable, externally visible identifier generated on insert.
PublicId = NewType("PublicId", str)

YesNo = Literal["YES", "NO"]
YES: YesNo = "YES"
NO: YesNo = "NO"

Direction = Literal["ltr", "rtl"]


def new_public_id() -> PublicId:
    return PublicId(str(uuid.uuid4()))


def new_internal_key() -> InternalKey:
    return InternalKey(str(uuid.uuid4()))
