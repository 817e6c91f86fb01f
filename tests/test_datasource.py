import pytest

from product_describer.core.exceptions import DatasetError
from product_describer.core.utils.datasource import load_records
from product_describer.core.utils.records import REQUIRED_COLUMNS


def test_missing_file_yields_no_records(tmp_path):
    records, columns = load_records(tmp_path / "missing.csv")

    assert records == []
    assert columns == []


def test_zero_byte_file_yields_no_records(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")

    assert load_records(path) == ([], [])


def test_header_only_file_yields_columns_without_records(tmp_path):
    path = tmp_path / "header.csv"
    path.write_text("Handle,Title,Product Description\n")

    records, columns = load_records(path)

    assert records == []
    assert columns == ['Handle', 'Title', 'Product Description']


def test_values_are_read_as_strings_in_file_order(tmp_path, write_csv, product_row):
    path = write_csv(tmp_path / "in.csv", [
        product_row('b', **{'Variant SKU': '00123', 'Tags': 'x, y'}),
        product_row('a', **{'Variant SKU': '', 'Tags': ''}),
    ])

    records, columns = load_records(path, required_columns=REQUIRED_COLUMNS)

    assert [record.handle for record in records] == ['b', 'a']
    assert records[0].extra['Variant SKU'] == '00123'
    assert records[0].tags == 'x, y'
    assert records[1].extra['Variant SKU'] == ''
    assert records[1].tags == ''
    assert 'Variant SKU' in columns


def test_missing_required_columns_is_fatal(tmp_path):
    path = tmp_path / "in.csv"
    path.write_text("Title,Vendor\nMug,Acme\n")

    with pytest.raises(DatasetError, match="Missing required columns"):
        load_records(path, required_columns=['Handle'])


def test_ragged_rows_are_fatal(tmp_path):
    path = tmp_path / "in.csv"
    path.write_text("Handle,Title\nmug,Mug,unexpected,extra\n")

    with pytest.raises(DatasetError):
        load_records(path)


def test_duplicate_header_names_are_fatal(tmp_path):
    path = tmp_path / "in.csv"
    path.write_text("Handle,Title,Title\nmug,Mug,Cup\n")

    with pytest.raises(DatasetError, match="duplicate columns"):
        load_records(path)


def test_directory_is_fatal(tmp_path):
    with pytest.raises(DatasetError):
        load_records(tmp_path)
