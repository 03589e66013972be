import json

from branded_docs.app import main


def test_cli_renders_record(tmp_path, capsys, sample_invoice):
    record = tmp_path / "invoice.json"
    record.write_text(json.dumps(sample_invoice), encoding="utf-8")
    branding = tmp_path / "tenant.json"
    branding.write_text(json.dumps({"branding": {"primaryColor": "#0D4F3C", "invoicePdfTemplate": 5}}), encoding="utf-8")

    code = main(["invoice", str(record), "--branding", str(branding), "--out", str(tmp_path / "pdf")])

    assert code == 0
    out = capsys.readouterr().out.strip()
    assert out.endswith("INV-2024001.pdf")
    assert (tmp_path / "pdf" / "INV-2024001.pdf").read_bytes().startswith(b"%PDF")


def test_cli_empty_record(tmp_path):
    record = tmp_path / "null.json"
    record.write_text("null", encoding="utf-8")
    assert main(["report", str(record), "--out", str(tmp_path)]) == 1
