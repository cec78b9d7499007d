# pen_harvest/report/json_report.py

"""
JSON report of a PenHarvest run.

Serializes a RunReport to a file.
"""
import json
from pathlib import Path

from pen_harvest.summary import RunReport


def render_json(report: RunReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: RunReport returned by the pipeline
    :param output_path: path of the JSON file
    :param pretty: indent the output by 2 spaces
    :return: Path of the saved file

    Example:
    ```python
    from pen_harvest.report.json_report import render_json
    report_path = render_json(report, 'reports/run.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.as_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
