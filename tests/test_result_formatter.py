from shiritori_search.app.services.result_formatter import ChainResultFormatter


def test_format_chains():
    formatter = ChainResultFormatter()
    rendered = formatter.format_chains([["ねこ", "こい"], ["こい", "いぬ"]])

    assert rendered.splitlines() == [
        "### Chains (2)",
        "",
        "1. ねこ → こい",
        "2. こい → いぬ",
    ]
    assert formatter.format_chains([]).startswith("❌")


def test_long_results_are_truncated():
    formatter = ChainResultFormatter(max_rows=2)
    rendered = formatter.format_chains([["a"], ["b"], ["c"]], title="Loops")

    assert rendered.startswith("### Loops (3)")
    assert "3. c" not in rendered
    assert "_Showing the first 2 of 3 results._" in rendered


def test_format_counts():
    formatter = ChainResultFormatter()
    rendered = formatter.format_counts({"い": 2, "ぬ": 1}, boundary="start")

    assert "### 3 chains" in rendered
    assert "| First unit | Chains |" in rendered
    assert "| い | 2 |" in rendered
    assert formatter.format_counts({}).startswith("❌")


def test_format_response_picks_the_shape():
    formatter = ChainResultFormatter()

    assert formatter.format_response({"results": [["ねこ"]]}) == formatter.format_chains([["ねこ"]])
    counts = {"total_count": 1, "char_counts": {"い": 1}}
    assert "| Last unit | Chains |" in formatter.format_response(counts)


def test_format_words():
    formatter = ChainResultFormatter()

    assert formatter.format_words(["いぬ", "こい"]).endswith("いぬ、こい")
    assert formatter.format_words([]) == "❌ No words match."


def test_format_telemetry():
    formatter = ChainResultFormatter()
    snapshot = {
        "events": [{"name": "search.exact", "duration": 0.25, "metadata": {"results": 3}}],
        "counters": {"search.completed": 1.0},
    }

    rendered = formatter.format_telemetry(snapshot)
    assert "- `search.exact` took 0.250s (results=3)" in rendered
    assert "`search.completed`: 1" in rendered
    assert formatter.format_telemetry({}) == ""
