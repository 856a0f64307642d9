from receipt_processor import __version__


def test_process_then_lookup_points(client, target_receipt):
    response = client.post("/receipts/process", json=target_receipt)

    assert response.status_code == 200
    body = response.json()
    assert body["receipt"]["points"] == 28
    assert body["receipt"]["purchaseDate"] == "2022-01-01"
    assert body["receipt"]["total"] == "35.35"
    assert body["receipt"]["items"][0] == {"shortDescription": "Mountain Dew 12PK", "price": "6.49"}

    points = client.get(f"/receipts/{body['id']}/points")
    assert points.status_code == 200
    assert points.json() == {"points": 28}


def test_each_submission_gets_its_own_id(client, corner_market_receipt):
    first = client.post("/receipts/process", json=corner_market_receipt).json()["id"]
    second = client.post("/receipts/process", json=corner_market_receipt).json()["id"]
    assert first != second


def test_invalid_receipt_returns_all_failures(client, target_receipt):
    target_receipt["purchaseDate"] = "2022/01/01"
    target_receipt["purchaseTime"] = "1:01pm"
    target_receipt["total"] = "99.99"

    response = client.post("/receipts/process", json=target_receipt)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid receipt"
    assert [f["code"] for f in body["failures"]] == [
        "InvalidDateFormat",
        "InvalidTimeFormat",
        "TotalMismatch",
    ]
    assert "purchase date" in body["detail"]


def test_missing_fields_are_reported_by_the_validator(client):
    response = client.post("/receipts/process", json={"retailer": "Target"})

    assert response.status_code == 400
    assert [f["field"] for f in response.json()["failures"]] == [
        "purchaseDate", "purchaseTime", "total",
    ]


def test_rejected_receipt_is_not_stored(client, target_receipt):
    target_receipt["retailer"] = ""
    assert client.post("/receipts/process", json=target_receipt).status_code == 400

    assert client.get("/db").json() == {"database": {}}


def test_wrongly_typed_fields_are_reported_with_other_failures(client, single_item_receipt):
    single_item_receipt["total"] = 6.49
    single_item_receipt["purchaseDate"] = "bad"

    response = client.post("/receipts/process", json=single_item_receipt)

    assert response.status_code == 400
    failures = response.json()["failures"]
    assert [f["code"] for f in failures] == ["InvalidDateFormat", "UnparsableNumber"]
    assert [f["field"] for f in failures] == ["purchaseDate", "total"]


def test_numeric_item_price_names_its_path(client, single_item_receipt):
    single_item_receipt["items"][0]["price"] = 6.49

    response = client.post("/receipts/process", json=single_item_receipt)

    assert response.status_code == 400
    failures = response.json()["failures"]
    assert [(f["code"], f["field"]) for f in failures] == [("UnparsableNumber", "items[0].price")]


def test_non_object_item_is_reported_by_the_validator(client, single_item_receipt):
    single_item_receipt["items"] = [single_item_receipt["items"][0], 1]

    response = client.post("/receipts/process", json=single_item_receipt)

    assert response.status_code == 400
    failures = response.json()["failures"]
    assert [(f["code"], f["field"]) for f in failures] == [("MissingField", "items[1]")]


def test_huge_total_is_rejected_not_a_server_error(client, single_item_receipt):
    single_item_receipt["total"] = "1e30"
    single_item_receipt["items"][0]["price"] = "1e30"

    response = client.post("/receipts/process", json=single_item_receipt)

    assert response.status_code == 400
    assert [f["code"] for f in response.json()["failures"]] == [
        "UnparsableNumber",
        "UnparsableNumber",
    ]


def test_undecodable_body_is_rejected(client):
    response = client.post(
        "/receipts/process",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["failures"][0]["code"] == "MalformedPayload"


def test_unknown_receipt_id(client):
    response = client.get("/receipts/nope/points")

    assert response.status_code == 400
    assert response.json() == {"error": "That receipt does not exist.", "id": "nope", "failures": []}


def test_db_dump_lists_stored_receipts(client, single_item_receipt):
    receipt_id = client.post("/receipts/process", json=single_item_receipt).json()["id"]

    database = client.get("/db").json()["database"]

    assert list(database) == [receipt_id]
    assert database[receipt_id]["points"] == 12
    assert database[receipt_id]["retailer"] == "Target"


def test_db_dump_hidden_outside_debug(make_client):
    client = make_client(debug=False)
    assert client.get("/db").status_code == 404


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": __version__, "store": "memory"}


def test_per_item_bonus_setting(make_client, corner_market_receipt):
    client = make_client(per_item_receipt_bonuses=True)

    response = client.post("/receipts/process", json=corner_market_receipt)

    assert response.json()["receipt"]["points"] == 139


def test_database_backend_end_to_end(make_client, target_receipt):
    with make_client(store_backend="database", debug=True) as client:
        receipt_id = client.post("/receipts/process", json=target_receipt).json()["id"]

        assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 28}
        assert client.get("/health").json()["store"] == "database"
        assert list(client.get("/db").json()["database"]) == [receipt_id]
