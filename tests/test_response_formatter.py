import json
from datetime import datetime

from bson import ObjectId

from response_formatter import format_block, to_json_safe


def test_object_ids_and_dates_become_strings():
    oid = ObjectId()
    doc = {"_id": oid, "added": datetime(2024, 1, 2), "tags": ("a", "b")}
    safe = to_json_safe(doc)
    assert safe == {"_id": str(oid), "added": "2024-01-02 00:00:00", "tags": ["a", "b"]}


def test_scalars_pass_through():
    assert to_json_safe(None) is None
    assert to_json_safe(1) == 1
    assert to_json_safe(True) is True


def test_format_block_renders_heading_and_json():
    block = format_block("Check if deleted:", None)
    assert block == "\nCheck if deleted:\nnull"

    block = format_block("Books:", [{"title": "Wuthering Heights", "author": "Emily Brontë"}])
    heading, body = block.strip().split("\n", 1)
    assert heading == "Books:"
    assert json.loads(body) == [{"title": "Wuthering Heights", "author": "Emily Brontë"}]
    assert "Brontë" in body
