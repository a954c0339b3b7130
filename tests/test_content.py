from __future__ import annotations

import pytest

from content.kinds import ALL_KINDS

TABLES = {kind.slug: kind.table.name for kind in ALL_KINDS}

# slug -> (create body, partial update body)
SAMPLES: dict[str, tuple[dict, dict]] = {
    "carousel-images": ({"filename": "hero.jpg", "row": 1}, {"row": 2}),
    "testimonials": (
        {
            "name": "Jane Roe",
            "designation": "CEO",
            "company": "Acme",
            "image": "jane.jpg",
            "content": "They handled everything.",
        },
        {"company": "Acme Ltd"},
    ),
    "promotional-offers": (
        {
            "title": "Spring consult",
            "description": "First hour free",
            "images": ["promo-1.jpg", "promo-2.jpg"],
            "link": "https://example.com/spring",
        },
        {"title": "Summer consult"},
    ),
    "attorneys": ({"name": "John Doe", "designation": "Partner", "image": "john.jpg"}, {"designation": "Senior Partner"}),
    "works": ({"title": "Cross-border merger", "image": "work.jpg"}, {"title": "Acquisition"}),
    "offers": ({"title": "Basic", "description": "One hour review", "price": "19.99"}, {"price": "25.00"}),
    "blogs": (
        {"title": "Hello", "author": "Jane Roe", "content": "First post", "image": "blog.jpg"},
        {"title": "Hello again"},
    ),
}

BLOB_NAMES = ["hero.jpg", "jane.jpg", "promo-1.jpg", "promo-2.jpg", "john.jpg", "work.jpg", "blog.jpg"]

# slug -> (blob field, value naming a missing file, missing name)
MISSING_BLOBS = {
    "carousel-images": ("filename", "nope.jpg", "nope.jpg"),
    "testimonials": ("image", "nope.jpg", "nope.jpg"),
    "promotional-offers": ("images", ["promo-1.jpg", "nope.jpg"], "nope.jpg"),
    "attorneys": ("image", "nope.jpg", "nope.jpg"),
    "works": ("image", "nope.jpg", "nope.jpg"),
    "blogs": ("image", "nope.jpg", "nope.jpg"),
}

ALL_SLUGS = list(SAMPLES)


@pytest.fixture
def blobs(put_blob):
    for name in BLOB_NAMES:
        put_blob(name)


def _create(client, slug: str) -> dict:
    resp = client.post(f"/{slug}", json=SAMPLES[slug][0])
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.mark.parametrize("slug", ALL_SLUGS)
def test_create_then_get_returns_client_fields(client, blobs, slug):
    body = SAMPLES[slug][0]
    resp = client.post(f"/{slug}", json=body)

    assert resp.status_code == 201
    payload = resp.json()
    assert payload["message"].endswith("created successfully")
    created = payload["data"]
    assert created["id"] >= 1

    fetched = client.get(f"/{slug}/{created['id']}")
    assert fetched.status_code == 200
    record = fetched.json()["data"]
    assert record == created
    for field_name, value in body.items():
        assert record[field_name] == value


@pytest.mark.parametrize("slug", ALL_SLUGS)
def test_list_returns_all_records(client, blobs, slug):
    first = _create(client, slug)
    second = _create(client, slug)

    resp = client.get(f"/{slug}")

    assert resp.status_code == 200
    assert [row["id"] for row in resp.json()["data"]] == [first["id"], second["id"]]


@pytest.mark.parametrize("slug", ALL_SLUGS)
def test_delete_then_get_is_not_found(client, blobs, files_dir, slug):
    created = _create(client, slug)

    deleted = client.delete(f"/{slug}/{created['id']}")
    assert deleted.status_code == 200
    assert deleted.json()["data"] == created

    assert client.get(f"/{slug}/{created['id']}").status_code == 404
    assert client.delete(f"/{slug}/{created['id']}").status_code == 404
    # Files referenced by the record are left alone.
    assert all((files_dir / name).exists() for name in BLOB_NAMES)


@pytest.mark.parametrize("slug", ALL_SLUGS)
def test_update_applies_only_given_fields(client, blobs, slug):
    created = _create(client, slug)
    changes = SAMPLES[slug][1]

    resp = client.patch(f"/{slug}/{created['id']}", json=changes)

    assert resp.status_code == 200
    updated = resp.json()["data"]
    assert updated["id"] == created["id"]
    for field_name, value in updated.items():
        if field_name in changes:
            assert value == changes[field_name]
        elif field_name != "updated_at":
            assert value == created[field_name]


@pytest.mark.parametrize("slug", ALL_SLUGS)
def test_update_with_empty_body_is_client_error_without_write(client, blobs, tables, slug):
    created = _create(client, slug)
    writes_before = tables[TABLES[slug]].writes

    resp = client.patch(f"/{slug}/{created['id']}", json={})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "At least one field is required for update"
    assert tables[TABLES[slug]].writes == writes_before


@pytest.mark.parametrize("slug", ALL_SLUGS)
def test_update_unknown_id_is_not_found(client, blobs, slug):
    resp = client.patch(f"/{slug}/999", json=SAMPLES[slug][1])

    assert resp.status_code == 404
    assert resp.json()["detail"].endswith("not found")


@pytest.mark.parametrize("slug", ALL_SLUGS)
@pytest.mark.parametrize("bad_id", ["abc", "0", "-3", "2147483648"])
def test_malformed_id_is_rejected_before_the_store(client, tables, slug, bad_id):
    assert client.get(f"/{slug}/{bad_id}").status_code == 400
    assert client.delete(f"/{slug}/{bad_id}").status_code == 400
    assert tables[TABLES[slug]].writes == 0


@pytest.mark.parametrize("slug", ALL_SLUGS)
def test_create_rejects_unknown_fields(client, blobs, tables, slug):
    body = dict(SAMPLES[slug][0], id=42)

    resp = client.post(f"/{slug}", json=body)

    assert resp.status_code == 400
    assert tables[TABLES[slug]].writes == 0


@pytest.mark.parametrize("slug", ALL_SLUGS)
def test_create_requires_every_required_field(client, blobs, tables, slug):
    body = dict(SAMPLES[slug][0])
    body.pop(next(iter(body)))

    resp = client.post(f"/{slug}", json=body)

    assert resp.status_code == 400
    assert tables[TABLES[slug]].writes == 0


@pytest.mark.parametrize("slug", list(MISSING_BLOBS))
def test_create_with_missing_blob_writes_nothing(client, blobs, tables, slug):
    field_name, value, missing = MISSING_BLOBS[slug]
    body = dict(SAMPLES[slug][0], **{field_name: value})

    resp = client.post(f"/{slug}", json=body)

    assert resp.status_code == 404
    assert resp.json()["detail"] == f"File not found: {missing}"
    assert tables[TABLES[slug]].writes == 0
    assert client.get(f"/{slug}").json()["data"] == []


@pytest.mark.parametrize("slug", list(MISSING_BLOBS))
def test_update_with_missing_blob_leaves_record_unchanged(client, blobs, tables, slug):
    created = _create(client, slug)
    field_name, value, _ = MISSING_BLOBS[slug]
    writes_before = tables[TABLES[slug]].writes

    resp = client.patch(f"/{slug}/{created['id']}", json={field_name: value})

    assert resp.status_code == 404
    assert tables[TABLES[slug]].writes == writes_before
    assert client.get(f"/{slug}/{created['id']}").json()["data"] == created


def test_blob_reference_with_path_segments_is_treated_as_missing(client, blobs, tables):
    resp = client.post("/works", json={"title": "Escape", "image": "../hero.jpg"})

    assert resp.status_code == 404
    assert tables["works"].writes == 0


def test_update_rejects_null_for_required_column(client, blobs):
    created = _create(client, "testimonials")

    resp = client.patch(f"/testimonials/{created['id']}", json={"name": None})

    assert resp.status_code == 400


def test_promotional_offer_link_can_be_cleared(client, blobs):
    created = _create(client, "promotional-offers")

    resp = client.patch(f"/promotional-offers/{created['id']}", json={"link": None})

    assert resp.status_code == 200
    assert resp.json()["data"]["link"] is None
    assert resp.json()["data"]["images"] == ["promo-1.jpg", "promo-2.jpg"]


def test_promotional_offer_requires_at_least_one_image(client, blobs):
    body = dict(SAMPLES["promotional-offers"][0], images=[])

    assert client.post("/promotional-offers", json=body).status_code == 400


def test_attorney_designation_defaults(client, blobs):
    resp = client.post("/attorneys", json={"name": "Ann Lee", "image": "john.jpg"})

    assert resp.status_code == 201
    assert resp.json()["data"]["designation"] == "Attorney"


def test_carousel_index_is_not_client_settable(client, blobs, tables):
    resp = client.post("/carousel-images", json={"filename": "hero.jpg", "row": 1, "index": 5})

    assert resp.status_code == 400
    assert tables["carousel_images"].writes == 0


def test_store_failure_is_internal_error(client, blobs, tables):
    tables["testimonials"].fail = True

    listed = client.get("/testimonials")
    created = client.post("/testimonials", json=SAMPLES["testimonials"][0])

    assert listed.status_code == 500
    assert listed.json()["detail"] == "Failed to fetch testimonial"
    assert created.status_code == 500
    assert created.json()["detail"] == "Failed to create testimonial"


def test_messages_name_the_kind(client, blobs):
    created = client.post("/works", json=SAMPLES["works"][0]).json()
    work_id = created["data"]["id"]

    assert created["message"] == "Work created successfully"
    assert client.patch(f"/works/{work_id}", json={"title": "New"}).json()["message"] == "Work updated successfully"
    assert client.delete(f"/works/{work_id}").json()["message"] == "Work deleted successfully"
    assert client.get(f"/works/{work_id}").json()["detail"] == "Work not found"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
