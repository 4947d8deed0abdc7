"""
Trailing instructions that ask the model for an optional ```chart block.

The block format is the contract read back by ``ai.response_parser``.
"""

from __future__ import annotations

CHART_TYPE_GUIDANCE = """- "bar": comparisons between categories
- "line": trends over time
- "pie": proportions of a whole
- "area": cumulative values over time
- "scatter": correlation between two measures
- "radar": multi-dimensional comparisons"""


def get_chart_instructions() -> str:
    return f"""
## Optional visualization

If a chart would make the answer clearer, append exactly ONE fenced block tagged `chart` at the very end of your response.  The block must contain only a JSON object, for example:

```chart
{{"type": "bar", "title": "Revenue by Region", "data": [{{"name": "North", "value": 120}}, {{"name": "South", "value": 95}}], "xKey": "name", "yKeys": ["value"]}}
```

Rules for the chart JSON:
- "type" must be one of: bar, line, pie, area, scatter, radar.  Pick it by purpose:
{CHART_TYPE_GUIDANCE}
- "title" is a short human-readable title.
- "data" is a non-empty array of flat records built from figures in the data above.
- "xKey" names the category / date field; "yKeys" lists the numeric fields to plot.  Every record must contain "xKey" and every field in "yKeys".
- Do not put comments or trailing commas in the JSON.
- Leave the block out entirely when a chart would not help.
"""
