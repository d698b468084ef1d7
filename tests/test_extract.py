from card_benefits.extract import extract, parse_free_text
from card_benefits.models import Transaction


def test_extract_skips_header_blank_and_unresolvable_rows():
    rows = [
        # Header row is skipped even when it would classify.
        ["01/01/2024", "LOOKS LIKE A ROW", "9.99"],
        ["03/15/2024", "UBER EATS", "12.50"],
        [],
        [None, None, None],
        ["Total", "", ""],
        ["03/16/2024", "DUNKIN", "6.50"],
    ]

    assert extract(rows) == [
        Transaction(date="03/15/2024", merchant="UBER EATS", description="UBER EATS", amount=12.5),
        Transaction(date="03/16/2024", merchant="DUNKIN", description="DUNKIN", amount=6.5),
    ]


def test_extract_keeps_duplicates_in_order():
    row = ["03/01/2024", "SPOTIFY USA", "11.99"]
    out = extract([["Date", "Description", "Amount"], row, row])
    assert len(out) == 2
    assert out[0] == out[1]


def test_extract_empty_sheet():
    assert extract([]) == []
    assert extract([["Date", "Description", "Amount"]]) == []


def test_parse_free_text_single_line():
    assert parse_free_text("DUNKIN $6.50") == [
        Transaction(date="N/A", merchant="DUNKIN", description="DUNKIN", amount=6.50)
    ]


def test_parse_free_text_drops_blank_and_unusable_lines():
    text = "\n".join(
        [
            "UBER EATS 23.40",
            "",
            "   ",
            "no amount here",
            "$12",
            "STARBUCKS 0",
            "RESY NYC $75.00\r",
        ]
    )

    out = parse_free_text(text)

    assert [(t.merchant, t.amount) for t in out] == [("UBER EATS", 23.40), ("RESY NYC", 75.0)]
    assert all(t.date == "N/A" for t in out)


def test_parse_free_text_uses_first_number_on_the_line():
    (tx,) = parse_free_text("LYFT 3 RIDES 30.00")
    assert tx.amount == 3.0
    assert tx.merchant == "LYFT  RIDES 30.00"
