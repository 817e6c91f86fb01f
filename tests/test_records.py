from product_describer.core.utils.records import (
    DESCRIPTION_COLUMN,
    ProductRecord,
    error_marker,
    merge_columns,
)


def test_from_row_splits_known_and_extra_columns():
    row = {
        'Handle': 'red-mug',
        'Title': 'Red Mug',
        'Variant SKU': 'MUG-1',
        'Product Category': 'Kitchen',
        'Body (HTML)': None,
    }
    record = ProductRecord.from_row(row)

    assert record.handle == 'red-mug'
    assert record.title == 'Red Mug'
    assert record.category == 'Kitchen'
    assert record.extra == {'Variant SKU': 'MUG-1', 'Body (HTML)': ''}


def test_to_row_preserves_unknown_columns_and_order():
    columns = ['Handle', 'Variant SKU', 'Title', 'Image Src', DESCRIPTION_COLUMN]
    record = ProductRecord.from_row({'Handle': 'h', 'Title': 'T', 'Variant SKU': 'S'})

    row = record.with_description('Nice').to_row(columns)

    assert list(row) == columns
    assert row == {
        'Handle': 'h',
        'Variant SKU': 'S',
        'Title': 'T',
        'Image Src': '',
        DESCRIPTION_COLUMN: 'Nice',
    }


def test_error_marker_round_trip():
    record = ProductRecord(handle='h').with_error(RuntimeError('boom'))

    assert record.description == error_marker('boom') == 'ERROR: boom'
    assert record.is_error
    assert record.has_description


def test_with_description_does_not_mutate_original():
    record = ProductRecord(handle='h')
    described = record.with_description('text')

    assert record.description == ''
    assert described.description == 'text'


def test_merge_columns_keeps_first_seen_order_and_adds_description():
    assert merge_columns(['Handle', 'Title'], ['Title', 'Extra']) == [
        'Handle', 'Title', 'Extra', DESCRIPTION_COLUMN
    ]
    assert merge_columns(['Handle', DESCRIPTION_COLUMN, 'Title']) == [
        'Handle', DESCRIPTION_COLUMN, 'Title'
    ]
