import pytest
import numpy as np
import pandas as pd
from logistic_fitter.utils import read_input, read_params, read_multi_response_input


def test_read_input_two_column_csv(tmp_path):
    csv_path = tmp_path / "qpcr.csv"
    csv_path.write_text(
        "Cycle,Fluorescence\n"
        "1,0.5\n"
        "2,1.25\n"
        "3,4\n"
    )

    df = read_input(str(csv_path))

    assert list(df.columns) == ["x", "y"]
    assert df["x"].tolist() == [1, 2, 3]
    assert df["y"].tolist() == [0.5, 1.25, 4.0]


def test_read_input_whitespace_txt(tmp_path):
    path = tmp_path / "cases.txt"
    path.write_text("day   cases\n0  3\n1  5\n2  9\n")

    df = read_input(str(path))
    assert df["y"].tolist() == [3, 5, 9]


def test_read_input_xy_columns_selected():
    df = read_input(pd.DataFrame({"note": ["a", "b"], "y": [1, 2], "x": [0, 1]}))
    assert list(df.columns) == ["x", "y"]
    assert df["x"].tolist() == [0, 1]


def test_read_input_pairs_and_dict():
    df = read_input([(1, 2.0), (2, 3.0), (3, 5.0)])
    assert df["x"].tolist() == [1, 2, 3]
    assert df["y"].tolist() == [2.0, 3.0, 5.0]

    df = read_input({"x": [1, 2], "y": [3, 4]})
    assert df["y"].tolist() == [3, 4]


def test_read_input_non_numeric_becomes_nan():
    df = read_input(pd.DataFrame({"x": [1, 2], "y": ["3", "n/a"]}))
    assert np.isnan(df["y"].iloc[1])


def test_read_input_too_many_columns():
    with pytest.raises(ValueError):
        read_input(pd.DataFrame({"a": [1], "b": [2], "c": [3]}))


def test_read_input_unsupported_extension(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{}")
    with pytest.raises(ValueError):
        read_input(str(path))


def test_read_multi_response_input(tmp_path):
    csv_path = tmp_path / "wells.csv"
    csv_path.write_text(
        "Cycle,A1,A2\n"
        "1,0.1,0.2\n"
        "2,0.3,0.5\n"
        "3,0.9,1.1\n"
    )

    data = read_multi_response_input(str(csv_path))

    assert data["predictor"] == "Cycle"
    assert list(data["individual"]) == ["A1", "A2"]
    a2 = data["individual"]["A2"]
    assert list(a2.columns) == ["x", "y"]
    assert a2["x"].tolist() == [1, 2, 3]
    assert a2["y"].tolist() == [0.2, 0.5, 1.1]


def test_read_multi_response_input_named_columns():
    df = pd.DataFrame({"Country": [5, 6, 7], "Day": [0, 1, 2], "Cases": [1, 4, 9]})

    data = read_multi_response_input(df, predictor="Day", responses=["Cases"])

    assert data["predictor"] == "Day"
    assert list(data["individual"]) == ["Cases"]
    assert data["individual"]["Cases"]["x"].tolist() == [0, 1, 2]


def test_read_multi_response_input_errors():
    df = pd.DataFrame({"Day": [0, 1, 2], "Cases": [1, 4, 9]})

    with pytest.raises(ValueError):
        read_multi_response_input(df, predictor="Cycle")

    with pytest.raises(ValueError):
        read_multi_response_input(df, responses=["Deaths"])

    with pytest.raises(ValueError):
        read_multi_response_input(df[["Day"]])


def test_read_params_yaml(tmp_path):
    yaml_path = tmp_path / "params.yaml"
    yaml_path.write_text(
        "ymax: 250.5\n"
        "max_iter: 40\n"
        "tol: 1.0e-10\n"
    )

    ymax, max_iter, tol, inflection, factor = read_params(str(yaml_path), None, 25, 1e-8)

    assert ymax == 250.5
    assert max_iter == 40
    assert isinstance(max_iter, int)
    assert tol == 1e-10
    assert inflection is None
    assert factor == 2.0


def test_read_params_txt(tmp_path):
    txt_path = tmp_path / "params.txt"
    txt_path.write_text(
        "# projected plateau\n"
        "ymax = None\n"
        "inflection_value = 1200\n"
        "ymax_factor = 2.5\n"
        "max_iter = 30\n"
        "extra_value = 123\n"
    )

    ymax, max_iter, tol, inflection, factor = read_params(str(txt_path), 10.0, 25, 1e-8)

    assert ymax is None
    assert inflection == 1200.0
    assert factor == 2.5
    assert max_iter == 30
    assert isinstance(max_iter, int)
    assert tol == 1e-8


def test_read_params_dict_defaults():
    ymax, max_iter, tol, inflection, factor = read_params(
        {"tol": 1e-6}, 100.0, 25, 1e-8, 40.0, 3.0
    )

    assert ymax == 100.0
    assert max_iter == 25
    assert tol == 1e-6
    assert inflection == 40.0
    assert factor == 3.0


def test_read_params_txt_invalid_format(tmp_path):
    txt_path = tmp_path / "params.txt"
    txt_path.write_text("badline_without_equals\n")

    with pytest.raises(ValueError):
        read_params(str(txt_path), None, 25, 1e-8)


def test_read_params_missing_file():
    with pytest.raises(FileNotFoundError):
        read_params("no_such_params.yaml", None, 25, 1e-8)


def test_read_params_yaml_exponent_without_decimal_point(tmp_path):
    yaml_path = tmp_path / "params.yaml"
    yaml_path.write_text(
        "ymax: 1e5\n"
        "tol: 1e-8\n"
        "inflection_value: 5e3\n"
        "max_iter: '40'\n"
    )

    ymax, max_iter, tol, inflection, factor = read_params(str(yaml_path), None, 25, 1e-6)

    assert ymax == 1e5
    assert tol == 1e-8
    assert inflection == 5e3
    assert max_iter == 40
    assert isinstance(max_iter, int)
    assert factor == 2.0


def test_read_multi_response_input_drops_blank_responses(tmp_path):
    csv_path = tmp_path / "cases.csv"
    csv_path.write_text(
        "Day,Italy,Spain\n"
        "0,1,2\n"
        "1,4,5\n"
        "2,9,\n"
        "3,16,\n"
    )

    data = read_multi_response_input(str(csv_path))

    assert data["individual"]["Italy"]["x"].tolist() == [0, 1, 2, 3]
    spain = data["individual"]["Spain"]
    assert spain["x"].tolist() == [0, 1]
    assert spain["y"].tolist() == [2.0, 5.0]
