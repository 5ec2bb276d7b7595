from click.testing import CliRunner

from bnl.demo import demo, format_bits, parse_bits


def test_default_run():
    result = CliRunner().invoke(demo, ["--seed", "0"])

    assert result.exit_code == 0, result.output
    assert result.output.startswith("n = Network(input_len=6")
    assert "Network 6 -> 6 -> 7 -> 6" in result.output
    last = result.output.strip().splitlines()[-1]
    assert last.startswith("Result = ")
    assert len(last[len("Result = ") :]) == 6


def test_same_seed_same_output():
    runner = CliRunner()
    first = runner.invoke(demo, ["-s", "5", "-n", "4", "-l", "3", "-l", "2", "-i", "1010"])
    second = runner.invoke(demo, ["-s", "5", "-n", "4", "-l", "3", "-l", "2", "-i", "1010"])
    assert first.exit_code == 0, first.output
    assert first.output == second.output


def test_truth_table_flag():
    result = CliRunner().invoke(
        demo, ["-s", "1", "-n", "2", "-l", "1", "-i", "01", "--truth-table"]
    )
    assert result.exit_code == 0, result.output
    rows = [line for line in result.output.splitlines() if " -> " in line and not line.startswith("Network")]
    assert [row.split(" -> ")[0] for row in rows] == ["00", "01", "10", "11"]


def test_bad_input_bits():
    result = CliRunner().invoke(demo, ["-i", "10x101"])
    assert result.exit_code == 2
    assert "0s and 1s" in result.output


def test_wrong_input_length():
    result = CliRunner().invoke(demo, ["-i", "101"])
    assert result.exit_code == 2
    assert "expected an input of length 6, got 3" in result.output


def test_input_len_too_short():
    result = CliRunner().invoke(demo, ["-n", "1", "-l", "2", "-i", "1"])
    assert result.exit_code == 2
    assert "--input-len" in result.output


def test_narrow_hidden_layer():
    result = CliRunner().invoke(demo, ["-n", "3", "-l", "1", "-l", "2", "-i", "101"])
    assert result.exit_code == 2
    assert "at least 2 neurons, got 1" in result.output


def test_narrow_output_layer_is_allowed():
    result = CliRunner().invoke(demo, ["-s", "2", "-n", "3", "-l", "1", "-i", "101"])
    assert result.exit_code == 0, result.output
    assert result.output.strip().splitlines()[-1] in ("Result = 0", "Result = 1")


def test_bit_helpers():
    assert parse_bits("1001") == [True, False, False, True]
    assert format_bits([True, False, True]) == "101"
