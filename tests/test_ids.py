from bson import ObjectId

from instashare.utils.ids import to_doc_id, id_criteria, created_at_from_id, make_id


def test_hex_ids_become_object_ids():
    oid = ObjectId()
    assert to_doc_id(str(oid)) == oid
    assert to_doc_id(oid) is oid


def test_other_ids_are_left_alone():
    assert to_doc_id("u101") == "u101"
    # 24 chars but not hex
    assert to_doc_id("z" * 24) == "z" * 24
    assert id_criteria("u101") == {"_id": "u101"}


def test_created_at_only_for_object_ids():
    oid = ObjectId()
    assert created_at_from_id(oid) == oid.generation_time
    assert created_at_from_id("u101") is None


def test_make_id_is_short_alphanumeric():
    ids = {make_id() for _ in range(50)}
    assert all(len(i) == 6 and i.isalnum() for i in ids)
    assert len(ids) > 1
