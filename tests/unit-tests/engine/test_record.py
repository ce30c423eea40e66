import pytest
from fixedwidth.engine.record import Record
from fixedwidth.errors import (
    FormatLengthError,
    MissingFormatWarning,
    MissingInputError,
    NonNumericValueWarning,
    OversizedValueError,
    OversizedValueWarning,
    TruncationWarning,
    UnknownFieldError,
)
from fixedwidth.schema.registry import Schema


def test_defaults_loaded_at_construction(person):
    assert person.get("fname") is None
    assert person.get("points") == "0"


def test_parse_then_get(person):
    assert person.parse("       JayHannah    0003") is True
    assert person.get("fname") == "Jay"
    assert person.get("lname") == "Hannah"
    assert person.get("points") == "0003"


def test_set_then_render(person):
    person.set("fname", "Chuck")
    person.set("lname", "Norris")
    person.set("points", 17)
    assert person.render() == "     ChuckNorris    0017"


def test_declaration_order_is_byte_order():
    schema = Schema()
    schema.declare_field("A", length=10, format="%10s")
    schema.declare_field("B", length=5, format="%5s")
    rec = Record(schema)
    rec.parse("0123456789ABCDE")
    assert rec.get("A") == "0123456789"
    assert rec.get("B") == "ABCDE"


def test_round_trip(person):
    person.set("fname", "Jay")
    person.set("lname", "Hannah")
    person.set("points", "3")
    first = person.render()
    other = Record(person.schema)
    other.parse(first)
    assert other.render() == first


def test_round_trip_space_padded_numeric():
    schema = Schema()
    schema.declare_fields(["qty", "undef", "%5d", "code", "undef", "%3s"])
    rec = Record(schema)
    rec.parse("   17abc")
    assert rec.render() == "   17abc"


@pytest.mark.parametrize("line", ["", None])
def test_parse_requires_input(person, line):
    with pytest.raises(MissingInputError):
        person.parse(line)


def test_parse_overwrites_previous_values(person):
    person.set("fname", "Chuck")
    person.parse("       JayHannah    0003")
    assert person.get("fname") == "Jay"


def test_parse_short_line_is_permissive(person):
    person.set("points", "9")
    assert person.parse("       JayHan") is True
    assert person.get("fname") == "Jay"
    assert person.get("lname") == "Han"
    assert person.get("points") == ""


def test_parse_bytes_uses_record_encoding():
    schema = Schema()
    schema.declare_fields(["name", "undef", "%-5s"])
    rec = Record(schema, encoding="latin-1")
    rec.parse("éclat".encode("latin-1"))
    assert rec.get("name") == "éclat"


def test_parse_clone_returns_independent_copy(person):
    person.parse("       JayHannah    0003")
    copy = person.parse("     ChuckNorris    0017", clone=True)
    assert isinstance(copy, Record)
    assert copy.get("fname") == "Chuck"
    assert person.get("fname") == "Jay"
    assert copy.schema is person.schema


def test_clone_independence(person):
    person.set("fname", "Jay")
    twin = person.clone()
    twin.set("fname", "Chuck")
    assert person.get("fname") == "Jay"
    assert twin.get("fname") == "Chuck"


def test_get_strips_both_ends(person):
    person.set("lname", "  Hannah ")
    assert person.get("lname") == "Hannah"


def test_unknown_field_access(person):
    with pytest.raises(UnknownFieldError, match="nope"):
        person.get("nope")
    with pytest.raises(UnknownFieldError):
        person.set("nope", "x")
    with pytest.raises(UnknownFieldError):
        person.get_formatted("nope")
    with pytest.raises(KeyError):
        person["nope"]


def test_set_oversized_without_truncation_keeps_prior_value():
    schema = Schema()
    schema.declare_fields(["name", "undef", "%10s"])
    rec = Record(schema)
    rec.set("name", "short")
    with pytest.warns(OversizedValueWarning, match="10 characters or shorter"):
        assert rec.set("name", "12345678901") is False
    assert rec.get("name") == "short"


def test_set_oversized_with_truncation_stores_prefix():
    schema = Schema()
    schema.declare_fields(["name", "undef", "%10s"])
    schema.enable_truncation("name")
    rec = Record(schema)
    with pytest.warns(TruncationWarning):
        assert rec.set("name", "12345678901") is True
    assert rec.get("name") == "1234567890"


def test_truncate_flag_at_declaration():
    schema = Schema()
    schema.declare_field("code", format="%-3s", truncate=True)
    rec = Record(schema)
    with pytest.warns(TruncationWarning):
        rec.set("code", "ABCDE")
    assert rec.render() == "ABC"


def test_render_oversized_returns_none():
    schema = Schema()
    schema.declare_fields(["a", "undef", "%3s", "b", "undef", "%3s"])
    rec = Record(schema)
    rec.parse("abcdef")
    rec._values["b"] = "toolong"
    with pytest.warns(OversizedValueWarning, match="'b'"):
        assert rec.render() is None


def test_numeric_guard_substitutes_zero_without_touching_value(person):
    person.set("fname", "Jay")
    person.set("lname", "Hannah")
    person.set("points", "abc")
    with pytest.warns(NonNumericValueWarning, match="points"):
        line = person.render()
    assert line.endswith("0000")
    assert person.get("points") == "abc"


def test_numeric_guard_rejects_empty_and_signed(person):
    person.set("points", None)
    with pytest.warns(NonNumericValueWarning):
        assert person.get_formatted("points") == "0000"
    person.set("points", "-5")
    with pytest.warns(NonNumericValueWarning):
        assert person.get_formatted("points") == "0000"


def test_missing_format_falls_back_to_plain_string():
    schema = Schema()
    schema.declare_field("flag", length=1)
    rec = Record(schema)
    rec.set("flag", "Y")
    with pytest.warns(MissingFormatWarning, match="flag"):
        assert rec.render() == "Y"


def test_format_length_mismatch_is_fatal():
    schema = Schema()
    schema.declare_field("n", length=5, format="%3d")
    rec = Record(schema)
    rec.set("n", "7")
    with pytest.raises(FormatLengthError, match="'n'"):
        rec.render()


def test_reader_transform_does_not_change_raw_value():
    schema = Schema()
    schema.declare_field("n", length=1, format="%1d", reader=lambda rec: int(rec.get("n")) + 1)
    rec = Record(schema)
    rec.set("n", 3)
    assert rec.get_formatted("n") == "4"
    assert rec.render() == "4"
    assert rec.get("n") == 3


def test_reader_synthesizes_money_encoding():
    schema = Schema()
    schema.declare_field(
        "amount", length=7, format="%7s",
        reader=lambda rec: "%07d" % (float(rec.get("amount")) * 100),
    )
    rec = Record(schema)
    rec.set("amount", "13.2")
    assert rec.get_formatted("amount") == "0001320"
    assert rec.get("amount") == "13.2"


def test_get_formatted_matches_render_slice(person):
    person.parse("       JayHannah    0003")
    assert person.get_formatted("lname") == "Hannah    "
    assert person.get_formatted("fname") + person.get_formatted("lname") + person.get_formatted("points") == person.render()


def test_update_and_to_dict(person):
    assert person.update({"fname": "Jay", "lname": "Hannah"}) is True
    with pytest.warns(OversizedValueWarning):
        assert person.update({"points": "123456"}) is False
    assert person.to_dict() == {"fname": "Jay", "lname": "Hannah", "points": "0"}


def test_item_access(person):
    person["fname"] = "Jay"
    assert person["fname"] == "Jay"
    with pytest.warns(OversizedValueWarning):
        with pytest.raises(OversizedValueError):
            person["points"] = "123456"


def test_reader_without_format_renders_reader_output(recwarn):
    schema = Schema()
    schema.declare_field("id", length=2, format="%02d", default="7")
    schema.declare_field("check", length=1, reader=lambda rec: int(rec.get("id")) % 10)
    rec = Record(schema)
    assert rec.render() == "077"
    assert len(recwarn) == 0


def test_float_values_measured_without_rounding_noise():
    schema = Schema()
    schema.declare_field("rate", format="%5.2f")
    rec = Record(schema)
    assert rec.set("rate", 0.1 + 0.2) is True
    assert rec.get_formatted("rate") == " 0.30"
    assert rec.get("rate") == 0.1 + 0.2


def test_float_reader_output_with_string_format():
    schema = Schema()
    schema.declare_field("cents", length=4, format="%4s", reader=lambda rec: float(rec.get("cents")) * 100)
    rec = Record(schema)
    rec.set("cents", "13.2")
    assert rec.render() == "1320"
