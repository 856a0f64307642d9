import json

from receipt_processor.cli import main


def write_receipt(tmp_path, name, payload):
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_score_prints_points(tmp_path, capsys, target_receipt):
    path = write_receipt(tmp_path, "target.json", target_receipt)

    assert main(["score", str(path)]) == 0
    assert f"{path}: 28 points" in capsys.readouterr().out


def test_score_breakdown_and_per_item_bonuses(tmp_path, capsys, corner_market_receipt):
    path = write_receipt(tmp_path, "market.json", corner_market_receipt)

    assert main(["score", str(path), "--breakdown", "--per-item-bonuses"]) == 0
    out = capsys.readouterr().out
    assert "139 points" in out
    assert "afternoon_purchase" in out
    assert "retailer_alphanumeric" in out


def test_rejected_receipt_sets_exit_status(tmp_path, capsys, target_receipt, single_item_receipt):
    target_receipt["total"] = "0.01"
    bad = write_receipt(tmp_path, "bad.json", target_receipt)
    good = write_receipt(tmp_path, "good.json", single_item_receipt)

    assert main(["score", str(bad), str(good)]) == 1
    out = capsys.readouterr().out
    assert "REJECTED" in out
    assert "[TotalMismatch]" in out
    assert "12 points" in out


def test_unreadable_file(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    assert main(["score", str(path), str(tmp_path / "missing.json")]) == 1
    out = capsys.readouterr().out
    assert "cannot read receipt" in out
