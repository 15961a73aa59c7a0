from pathlib import Path

DOCS = Path(__file__).resolve().parent.parent / "docs"


def test_index_documents_record_and_toolchain_modules():
    index = (DOCS / "index.md").read_text()
    assert ".. automodule:: buildrec.records.artifact_record" in index
    assert ".. automodule:: buildrec.contracts.toolchain" in index


def test_conf_loads_markdown_index():
    conf = (DOCS / "conf.py").read_text()
    assert '"myst_parser"' in conf
    assert 'root_doc = "index"' in conf
