import json
from datetime import timedelta

from goodnews.cli import async_main, parse_args
from goodnews.core.normalizer import isoformat, utc_now


def write_config(tmp_path, news_server):
    path = tmp_path / "goodnews.yaml"
    path.write_text(f"transport:\n  proxy_url: {news_server.server.make_url('/api/news')}\n")
    return str(path)


def test_parse_args_defaults():
    args = parse_args([])
    assert args.country is None
    assert args.days == 7
    assert args.format == "text"


async def test_json_output(news_server, tmp_path, capsys):
    news_server.reply({"articles": [
        {"title": "Charity milestone reached", "url": "https://x/1", "publishedAt": isoformat(utc_now())},
        {"title": "Crisis deepens", "url": "https://x/2", "publishedAt": isoformat(utc_now())},
    ]})

    code = await async_main(["--country", "BG", "--days", "3", "--format", "json",
                             "--config", write_config(tmp_path, news_server)])

    assert code == 0
    captured = capsys.readouterr()
    output = json.loads(captured.out)
    assert output["country"] == "bg"
    assert output["outcome"] == "articles"
    assert [a["url"] for a in output["articles"]] == ["https://x/1"]
    assert output["articles"][0]["country"] == "Bulgaria"
    assert "Found 1 positive news articles." in captured.err


async def test_empty_result_message(news_server, tmp_path, capsys):
    news_server.reply({"articles": [
        {"title": "Old hope", "publishedAt": isoformat(utc_now() - timedelta(days=30))},
    ]})

    code = await async_main(["--country", "us", "--config", write_config(tmp_path, news_server)])

    assert code == 0
    assert "No positive news found" in capsys.readouterr().err


async def test_markdown_output(news_server, tmp_path, capsys):
    news_server.reply({"articles": [
        {"title": "Peace and progress", "description": "A wonderful milestone", "url": "https://x/3",
         "source": {"name": "Daily"}, "publishedAt": isoformat(utc_now())},
    ]})

    await async_main(["--country", "fr", "--format", "markdown", "--config", write_config(tmp_path, news_server)])

    out = capsys.readouterr().out
    assert out.startswith("# Good News: France")
    assert "### [Peace and progress](https://x/3)" in out
    assert "**Source:** Daily" in out


async def test_huge_days_still_exits_cleanly(news_server, tmp_path, capsys):
    code = await async_main(["--country", "us", "--days", "1000000", "--format", "json",
                             "--config", write_config(tmp_path, news_server)])

    assert code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["outcome"] == "empty"
    assert output["days"] == 36500
