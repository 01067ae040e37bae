"""
Open-source boilerplate — licenses, contribution guide, rustfmt config.

Each file is stamped with a copyright range running from the configured
start year to the current year.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

from xtask.core.models.artifact import RenderedArtifact
from xtask.core.models.config import XtaskConfig


def copyright_range(start_year: int, today: date | None = None) -> str:
    """``"2022"`` in the start year, ``"2022-2026"`` afterwards."""
    end_year = (today or date.today()).year
    if start_year >= end_year:
        return f"{start_year}"
    return f"{start_year}-{end_year}"


def _license_mit(years: str, holder: str) -> str:
    return f"""\
MIT License

Copyright (c) {years} {holder}

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""


def _license_apache(years: str, holder: str) -> str:
    return f"""\
Copyright {years} {holder}

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""


def _contributing(years: str, holder: str) -> str:
    return f"""\
# Contributing

Contributions are welcome. Before opening a pull request:

1. Regenerate derived files with `xtask codegen`.
2. Run the local pipeline with `xtask ci` (or `xtask ci fast` while iterating).

Generated files (`README.md`, the license files, this guide and the CI
workflow) must not be edited by hand. Edit their sources and rerun codegen.

Unless you explicitly state otherwise, any contribution you submit is
dual licensed under the MIT and Apache 2.0 licenses, copyright {years} {holder},
without any additional terms or conditions.
"""


_RUSTFMT_TOML = """\
imports_granularity = "Crate"
group_imports = "StdExternalCrate"
wrap_comments = true
format_code_in_doc_comments = true
"""


def generate_open_source_files(
    config: XtaskConfig,
    project_root: Path,
    today: date | None = None,
) -> list[RenderedArtifact]:
    """Render every boilerplate file for the workspace root.

    Args:
        config: Supplies the start year and copyright holder.
        project_root: Workspace root the files belong in.
        today: Date used for the end of the copyright range (default: today).

    Returns:
        One RenderedArtifact per file, destinations set.
    """
    root = Path(project_root)
    years = copyright_range(config.codegen.start_year, today)
    holder = config.codegen.copyright_holder

    return [
        RenderedArtifact.from_text(_license_mit(years, holder), root / "LICENSE-MIT", "MIT license"),
        RenderedArtifact.from_text(_license_apache(years, holder), root / "LICENSE-APACHE", "Apache 2.0 license"),
        RenderedArtifact.from_text(_contributing(years, holder), root / "CONTRIBUTING.md", "contribution guide"),
        RenderedArtifact.from_text(_RUSTFMT_TOML, root / "rustfmt.toml", "rustfmt config"),
    ]
