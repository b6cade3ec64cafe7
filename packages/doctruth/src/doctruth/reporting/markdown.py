from __future__ import annotations

from ..truth.model import ErrorRecord, ResultTree, SourceResult, TruthMeta

MAX_OUTPUT_LINES = 100
MAX_CELL_CHARS = 50
TOOL_LINE = "*Generated by DocTruth - The Universal Documentation Truth System*"


def title_for(meta: TruthMeta) -> str:
    return f"{meta.project} - Current Truth"


def table_cell(text: str, limit: int | None = MAX_CELL_CHARS) -> str:
    escaped = " ".join(text.splitlines()).replace("|", "\\|")
    return escaped if limit is None else escaped[:limit]


def _header(md: list[str], meta: TruthMeta) -> None:
    md.append(f"# {title_for(meta)}")
    md.append(f"Generated: {meta.generated}")
    md.append(f"Generation Time: {meta.generation_time}")
    md.append("")


def _warnings(md: list[str], errors: tuple[ErrorRecord, ...]) -> None:
    if not errors:
        return
    md.append("## ⚠️ Warnings")
    for error in errors:
        md.append(f"- **{error.type}**: {error.source} - {error.message}")
    md.append("")


def _status(md: list[str], tree: ResultTree) -> None:
    if tree.validations is None:
        return
    md.append(f"## Status: {tree.passed_validations}/{len(tree.validations)} validations passed")
    md.append("")


def _source_block(md: list[str], source: SourceResult) -> None:
    md.append(f"#### {source.name}{' [ESSENTIAL]' if source.essential else ''}")
    md.append("```bash")
    md.append(f"$ {source.command}")
    if source.output:
        lines = source.output.split("\n")
        if len(lines) > MAX_OUTPUT_LINES:
            md.append("\n".join(lines[:MAX_OUTPUT_LINES]))
            md.append(f"\n... ({len(lines) - MAX_OUTPUT_LINES} more lines truncated)")
        else:
            md.append(source.output)
    md.append("```")
    md.append("")


def _sources(md: list[str], tree: ResultTree) -> None:
    if tree.sources is None:
        return
    md.append("## Project State")
    md.append("")
    categories: dict[str, list[SourceResult]] = {}
    for source in tree.sources:
        categories.setdefault(source.category or "General", []).append(source)
    for category, sources in categories.items():
        if len(categories) > 1:
            md.append(f"### {category}")
            md.append("")
        for source in sources:
            _source_block(md, source)


def _validations(md: list[str], tree: ResultTree) -> None:
    if not tree.validations:
        return
    md.append("## Validation Results")
    md.append("")
    md.append("| Status | Validation | Result | Required |")
    md.append("|--------|------------|--------|----------|")
    for row in tree.validations:
        status = "✅" if row.passed else "❌"
        required = "Yes" if row.required else "No"
        md.append(f"| {status} | {row.name} | {table_cell(row.output)} | {required} |")
    md.append("")


def _examples(md: list[str], tree: ResultTree) -> None:
    if not tree.examples:
        return
    md.append("## Working Examples")
    md.append("")
    md.append("```bash")
    for example in tree.examples:
        md.append(f"# {example.name}")
        if example.description:
            md.append(f"# {example.description}")
        md.append(example.command)
        md.append("")
    md.append("```")
    md.append("")


def _benchmarks(md: list[str], tree: ResultTree) -> None:
    if not tree.benchmarks:
        return
    md.append("## Performance Metrics")
    md.append("")
    md.append("| Metric | Value |")
    md.append("|--------|-------|")
    for bench in tree.benchmarks:
        value = bench.value + (f" {bench.unit}" if bench.unit else "")
        md.append(f"| {bench.name} | {table_cell(value, limit=None)} |")
    md.append("")


def _platform(md: list[str], tree: ResultTree) -> None:
    if not tree.platform:
        return
    md.append("## Environment")
    md.append("")
    for item in tree.platform:
        md.append(f"- **{item.name}**: {item.value}")
    md.append("")


def render_markdown(tree: ResultTree, errors: tuple[ErrorRecord, ...], config_path: str) -> str:
    md: list[str] = []
    _header(md, tree.meta)
    _warnings(md, errors)
    _status(md, tree)
    _sources(md, tree)
    _validations(md, tree)
    _examples(md, tree)
    _benchmarks(md, tree)
    _platform(md, tree)
    md.append("---")
    md.append(TOOL_LINE)
    md.append(f"*Config: {config_path}*")
    return "\n".join(md) + "\n"
