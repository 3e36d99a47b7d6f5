from __future__ import annotations

from typing import Any, Mapping, Sequence

from jinja2 import Environment, select_autoescape

_TEMPLATE = """<!DOCTYPE html>
<html lang="tr">
<head>
<meta charset="utf-8">
<title>{{ title }}</title>
<style>
  body { font-family: Arial, sans-serif; margin: 24px; }
  h1 { font-size: 18px; }
  table { border-collapse: collapse; width: 100%; font-size: 12px; }
  th, td { border: 1px solid #999; padding: 4px 6px; text-align: left; }
  th { background: #eee; }
  @media print { body { margin: 0; } }
</style>
</head>
<body>
<h1>{{ title }}</h1>
{% if rows %}
<table>
  <thead><tr>{% for col in columns %}<th>{{ col }}</th>{% endfor %}</tr></thead>
  <tbody>
  {% for row in rows %}
    <tr>{% for col in columns %}<td>{{ row.get(col, "") if row.get(col) is not none else "" }}</td>{% endfor %}</tr>
  {% endfor %}
  </tbody>
</table>
{% else %}
<p>Veri yok</p>
{% endif %}
</body>
</html>
"""

_env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))
_template = _env.from_string(_TEMPLATE)


def render_printable(title: str, rows: Sequence[Mapping[str, Any]]) -> str:
    columns = list(rows[0].keys()) if rows else []
    return _template.render(title=title, rows=list(rows), columns=columns)
