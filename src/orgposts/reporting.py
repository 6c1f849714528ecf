"""
Grouping, text formatting and the console/text/HTML renderers.
"""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .dates import to_localized_date
from .models import GroupedResults, SearchResultItem, SearchTarget
from .state import Phase, ViewState


EMPTY_RESULT_TEXT = "指定された期間に投稿はありませんでした。"


def group_by_author(items: Iterable[SearchResultItem]) -> GroupedResults:
    """
    Partition ``items`` by author, keeping first-seen author order and the
    original order inside every group.
    """

    groups: GroupedResults = {}
    for item in items:
        groups.setdefault(item.author_id, []).append(item)
    return groups


def format_grouped(groups: GroupedResults) -> str:
    blocks: List[str] = []
    for author_id, items in groups.items():
        lines = [f"- {author_id} ({len(items)}件)"]
        lines.extend(
            f"  - [{item.title}]({item.url}) {to_localized_date(item.created_at)}"
            for item in items
        )
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def render_output(items: Sequence[SearchResultItem]) -> str:
    """
    Produce the copyable text block, or the placeholder when nothing matched.
    """

    if not items:
        return EMPTY_RESULT_TEXT
    return format_grouped(group_by_author(items))


def summarise_by_author(items: Sequence[SearchResultItem]) -> list[tuple[str, int]]:
    rows = [(author_id, len(group)) for author_id, group in group_by_author(items).items()]
    rows.sort(key=lambda row: (-row[1], row[0].lower()))
    return rows


def _ascii_bars(rows: Sequence[Tuple[str, int]], width: int = 18) -> list[str]:
    if not rows:
        return []
    max_count = max(count for _, count in rows) or 1
    bars: list[str] = []
    for _, count in rows:
        length = int(round((count / max_count) * width)) if count else 0
        bars.append("█" * max(length, 1 if count else 0))
    return bars


def render_cli_report(console: Console, state: ViewState, target: SearchTarget) -> None:
    """
    Print the search summary and the rendered text to the console.
    """

    console.print(Text("Qiita組織投稿検索", style="bold green"))

    bullet = "✦"
    console.print(Text(f"{bullet} Organization: {target.organization}", style="magenta"))
    console.print(Text(f"{bullet} Range: {state.start} → {state.end}", style="cyan"))
    if state.phase is Phase.SUCCESS:
        console.print(Text(f"{bullet} Posts: {len(state.items)}", style="cyan"))
    console.print()

    if state.phase is Phase.FAILED:
        console.print(Text(state.error or "", style="bold red"))
        return

    if not state.items:
        console.print(Text(state.output_text, style="yellow"))
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        header_style="bold cyan",
        padding=(0, 1),
        title="Posts by author",
    )
    table.add_column("Author", style="magenta", no_wrap=True)
    table.add_column("Posts", justify="right", style="bold cyan")
    table.add_column("", style="green", no_wrap=True)
    rows = summarise_by_author(state.items)
    for (author_id, count), bar in zip(rows, _ascii_bars(rows)):
        table.add_row(author_id, str(count), bar)
    console.print(table)
    console.print()
    console.print(Text(state.output_text))


def write_text_report(text: str, output_path: Path) -> Path:
    """
    Write the rendered text verbatim, ready to paste elsewhere.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    return output_path


def write_html_report(state: ViewState, target: SearchTarget, output_path: Path) -> Path:
    """
    Generate a single page with the result in a read-only textarea and a copy button.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    error_banner = ""
    if state.error:
        error_banner = f'<div class="error">{escape(state.error)}</div>'

    html = f"""<!DOCTYPE html>
<html lang="ja">
<head>
    <meta charset="utf-8" />
    <title>Qiita組織投稿検索</title>
    <style>
        body {{
            margin: 0 auto;
            padding: 2rem;
            max-width: 56rem;
            font-family: system-ui, sans-serif;
        }}
        .meta {{
            color: #555;
            margin-bottom: 1.5rem;
        }}
        .error {{
            background: #fee2e2;
            border: 1px solid #f87171;
            color: #b91c1c;
            padding: 0.75rem 1rem;
            border-radius: 0.25rem;
            margin-bottom: 1rem;
        }}
        .result-header {{
            display: flex;
            justify-content: space-between;
            align-items: center;
        }}
        textarea {{
            width: 100%;
            height: 24rem;
            padding: 1rem;
            font-family: ui-monospace, monospace;
            font-size: 0.875rem;
            white-space: pre;
            overflow-x: auto;
            box-sizing: border-box;
        }}
    </style>
</head>
<body>
    <h1>Qiita組織投稿検索</h1>
    <p class="meta">org:{escape(target.organization)} / 開始日 {escape(state.start)} / 終了日 {escape(state.end)}</p>
    {error_banner}
    <section>
        <div class="result-header">
            <h2>検索結果</h2>
            <button type="button" id="copy">クリップボードにコピー</button>
        </div>
        <textarea id="result" readonly placeholder="ここに検索結果が表示されます">{escape(state.output_text)}</textarea>
    </section>
    <script>
        document.getElementById("copy").addEventListener("click", function () {{
            navigator.clipboard.writeText(document.getElementById("result").value);
            alert("コピーしました！");
        }});
    </script>
</body>
</html>
"""

    output_path.write_text(html, encoding="utf-8")
    return output_path
