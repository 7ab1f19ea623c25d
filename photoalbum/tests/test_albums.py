from conftest import make_photo


def _album_ids(client, photo_id):
    return client.get(f"/photos/{photo_id}").json()["albumIds"]


def _assert_links_consistent(client):
    photos = client.get("/photos").json()
    albums = client.get("/albums").json()
    for album in albums:
        for photo in photos:
            assert (album["id"] in photo["albumIds"]) == (photo["id"] in album["photoIds"])


def test_trip_scenario(client):
    for _ in range(6):
        make_photo(client)

    r = client.post("/albums", json={"userId": 1, "title": "Trip", "photoIds": [5, 6]})
    assert r.status_code == 201
    album = r.json()
    assert album["coverPhoto"] == 5
    assert album["shareId"].startswith("trip-")
    assert _album_ids(client, 5) == [album["id"]]
    assert _album_ids(client, 6) == [album["id"]]
    _assert_links_consistent(client)

    r = client.put(f"/albums/{album['id']}", json={"photoIds": [6]})
    assert r.status_code == 200
    assert _album_ids(client, 5) == []
    assert _album_ids(client, 6) == [album["id"]]
    _assert_links_consistent(client)

    assert client.get(f"/shares/{album['shareId']}").status_code == 200

    r = client.delete(f"/albums/{album['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert _album_ids(client, 6) == []
    assert client.get(f"/albums/{album['id']}").status_code == 404
    assert client.get(f"/shares/{album['shareId']}").status_code == 404


def test_create_album_validation(client):
    make_photo(client)
    r = client.post("/albums", json={"userId": 1, "title": "", "photoIds": [1]})
    assert r.status_code == 400
    assert r.json()["error"] == "Album title is required"
    r = client.post("/albums", json={"userId": 1, "title": "Empty"})
    assert r.status_code == 400
    assert client.get("/albums").json() == []


def test_update_never_changes_share_id(client):
    make_photo(client)
    album = client.post("/albums", json={"userId": 1, "title": "A", "photoIds": [1]}).json()

    r = client.put(f"/albums/{album['id']}", json={"title": "Renamed", "shareId": "mine-now"})

    assert r.status_code == 200
    assert r.json()["title"] == "Renamed"
    assert r.json()["shareId"] == album["shareId"]
    assert client.get(f"/shares/{album['shareId']}").json()["album"]["title"] == "Renamed"


def test_adding_linked_photo_twice_does_not_duplicate(client):
    make_photo(client)
    make_photo(client)
    album = client.post("/albums", json={"userId": 1, "title": "A", "photoIds": [1]}).json()

    r = client.put(f"/albums/{album['id']}", json={"photoIds": [1, 1, 2]})

    assert r.json()["photoIds"] == [1, 2]
    assert _album_ids(client, 1) == [album["id"]]
    _assert_links_consistent(client)


def test_list_albums_by_user(client):
    make_photo(client, user_id=1)
    make_photo(client, user_id=2)
    client.post("/albums", json={"userId": 1, "title": "Mine", "photoIds": [1]})
    client.post("/albums", json={"userId": 2, "title": "Theirs", "photoIds": [2]})

    r = client.get("/albums", params={"userId": 2})
    assert [a["title"] for a in r.json()] == ["Theirs"]
    assert len(client.get("/albums").json()) == 2


def test_missing_album_is_not_found(client):
    assert client.get("/albums/5").status_code == 404
    assert client.put("/albums/5", json={"title": "x"}).status_code == 404
    r = client.delete("/albums/5")
    assert r.status_code == 404
    assert r.json() == {"error": "Album not found"}


def test_shared_album_view(client):
    make_photo(client, title="one")
    make_photo(client, title="two")
    album = client.post("/albums", json={"userId": 1, "title": "A", "photoIds": [2, 1]}).json()

    r = client.get(f"/shares/{album['shareId']}")

    assert r.status_code == 200
    assert r.json()["album"]["id"] == album["id"]
    assert [p["title"] for p in r.json()["photos"]] == ["two", "one"]


def test_unavailable_store_maps_to_503(client, store):
    store.path.write_text("{broken", encoding="utf-8")
    r = client.get("/albums")
    assert r.status_code == 503
    assert "error" in r.json()


def test_create_album_with_only_unknown_photos_is_rejected(client):
    make_photo(client)
    r = client.post("/albums", json={"userId": 1, "title": "Ghosts", "photoIds": [99]})
    assert r.status_code == 400
    assert client.get("/albums").json() == []
    assert client.get("/photos/1").json()["albumIds"] == []
