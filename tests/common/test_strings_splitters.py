from roster.common.strings.splitters import csv_to_list


def test_csv_to_list():
    assert csv_to_list(None) == []
    assert csv_to_list("a, b,,c ") == ["a", "b", "c"]
    assert csv_to_list([" x ", "", "y"]) == ["x", "y"]
