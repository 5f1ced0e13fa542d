"""Type aliases for the loosely typed data the API moves around.

Documents come out of MongoDB as plain dictionaries, so these aliases name
what a given ``dict`` is meant to be rather than constrain it.
"""

from typing import Any

# A document as stored in or returned from a collection
type Document = dict[str, Any]

# A MongoDB query filter, e.g. {"title-en": {"$exists": True}}
type QueryFilter = dict[str, Any]

# A MongoDB inclusion projection, e.g. {"title-en": 1, "images": 1}
type Projection = dict[str, int]
