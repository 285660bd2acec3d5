"""Tests for ffgen.resolution.walker."""

from __future__ import annotations

from pathlib import Path

from ffgen.models import AliasTable
from ffgen.resolution.walker import ImportGraphWalker, walk
from tests._fixtures.project_builder import ProjectBuilder


def test_end_to_end_example(project: ProjectBuilder) -> None:
    project.write({"a.ts": 'import {x} from "./b"\n', "b.ts": "export const x = 1;\n"})
    a, b = project.path("a.ts"), project.path("b.ts")

    result = walk([a])

    assert result.files == [a, b]
    assert result.provenance == {a: {a}, b: {a}}
    assert result.imports[a] == [b]
    assert result.errors == {}


def test_seeds_without_imports_map_to_themselves(project: ProjectBuilder) -> None:
    project.write({"one.js": "console.log(1);\n", "two.py": "print(2)\n", "notes.md": "# hi\n"})
    seeds = [project.path("one.js"), project.path("two.py"), project.path("notes.md")]

    result = walk(seeds)

    assert result.files == seeds
    assert result.provenance == {seed: {seed} for seed in seeds}


def test_cycle_terminates(project: ProjectBuilder) -> None:
    project.write(
        {
            "a.js": 'const b = require("./b");\n',
            "b.js": 'import a from "./a";\n',
        }
    )
    a, b = project.path("a.js"), project.path("b.js")

    result = walk([a])

    assert set(result.files) == {a, b}
    assert result.provenance[a] == {a}
    assert result.provenance[b] == {a}


def test_diamond_dependency_appears_once_with_both_origins(project: ProjectBuilder) -> None:
    project.write(
        {
            "a.ts": 'import "./c";\n',
            "b.ts": 'import { y } from "./c";\n',
            "c.ts": "export const y = 2;\n",
        }
    )
    a, b, c = project.path("a.ts"), project.path("b.ts"), project.path("c.ts")

    result = walk([a, b])

    assert result.files.count(c) == 1
    assert result.provenance[c] == {a, b}
    assert result.origins(c) == [a, b]


def test_transitive_imports_and_seed_reached_by_other_seed(project: ProjectBuilder) -> None:
    project.write(
        {
            "app.ts": 'import { svc } from "./services";\n',
            "services/index.ts": 'export * from "./api";\nimport { get } from "./api";\n',
            "services/api.ts": 'import config from "../config";\n',
            "config.ts": "export default {};\n",
        }
    )
    app = project.path("app.ts")
    index = project.path("services/index.ts")
    api = project.path("services/api.ts")
    config = project.path("config.ts")

    result = walk([app, api])

    assert result.files == [app, index, api, config]
    assert result.provenance[api] == {app, api}
    assert result.provenance[config] == {app, api}
    assert result.provenance[index] == {app}


def test_bare_imports_never_join_the_set(project: ProjectBuilder) -> None:
    project.write(
        {
            "main.js": 'import React from "react";\nconst _ = require("lodash");\n',
            "node_modules/react/index.js": "",
        }
    )
    main = project.path("main.js")

    assert walk([main]).files == [main]


def test_python_relative_imports_are_followed(project: ProjectBuilder) -> None:
    project.write(
        {
            "pkg/__init__.py": "",
            "pkg/main.py": "import os\nfrom .models import User\nfrom . import views\n",
            "pkg/models.py": "from dataclasses import dataclass\n",
            "pkg/views.py": "",
        }
    )
    main = project.path("pkg/main.py")

    result = walk([main])

    assert result.files == [main, project.path("pkg/models.py"), project.path("pkg/__init__.py")]


def test_alias_imports_are_followed(project: ProjectBuilder) -> None:
    project.write(
        {
            "src/page.tsx": 'import { Button } from "@ui/button";\n',
            "src/ui/button/index.tsx": "export const Button = () => null;\n",
        }
    )
    table = AliasTable(base_dir=project.path(), paths={"@ui/*": ["src/ui/*"]})
    page = project.path("src/page.tsx")

    result = walk([page], table)

    assert result.files == [page, project.path("src/ui/button/index.tsx")]


def test_unreadable_file_is_recorded_and_skipped(project: ProjectBuilder) -> None:
    project.write({"a.ts": 'import "./bad";\nimport "./good";\n', "good.ts": ""})
    (project.path() / "bad.ts").write_bytes(b"\xff\xfe\x00binary")
    a, good, bad = project.path("a.ts"), project.path("good.ts"), project.path("bad.ts")

    result = walk([a])

    assert result.files == [a, good]
    assert bad in result.errors
    assert bad not in result.provenance


def test_missing_seed_is_reported_not_raised(project: ProjectBuilder) -> None:
    missing = project.path("gone.ts")

    result = walk([missing])

    assert result.files == []
    assert missing in result.errors


def test_each_file_is_read_once(project: ProjectBuilder) -> None:
    project.write(
        {
            "a.ts": 'import "./shared";\nimport "./b";\n',
            "b.ts": 'import "./shared";\nimport "./a";\n',
            "shared.ts": "",
        }
    )
    reads: list[Path] = []

    def _reader(path: Path) -> str:
        reads.append(path)
        return path.read_text(encoding="utf-8")

    walker = ImportGraphWalker(reader=_reader)
    walker.walk([project.path("a.ts"), project.path("b.ts")])

    assert sorted(reads) == sorted(
        [project.path("a.ts"), project.path("b.ts"), project.path("shared.ts")]
    )


def test_duplicate_seeds_are_collapsed(project: ProjectBuilder) -> None:
    project.write({"a.ts": ""})
    a = project.path("a.ts")

    result = walk([a, str(a)])

    assert result.seeds == [a]
    assert result.files == [a]


def test_scan_file_records_each_specifier_outcome(project: ProjectBuilder) -> None:
    project.write(
        {
            "a.ts": 'import React from "react";\nimport { b } from "./b";\nimport "./gone";\n',
            "b.ts": "",
        }
    )

    info = ImportGraphWalker().scan_file(project.path("a.ts"))

    assert info.imports == [project.path("b.ts")]
    assert [item.specifier for item in info.specifiers] == ["react", "./b", "./gone"]
    assert info.unresolved == ["react", "./gone"]


def test_missing_file_of_unsupported_type_is_an_error(project: ProjectBuilder) -> None:
    project.write({"notes.md": "# notes\n"})
    notes, gone = project.path("notes.md"), project.path("gone.md")

    result = walk([notes, gone])

    assert result.files == [notes]
    assert result.imports[notes] == []
    assert gone in result.errors
    assert gone not in result.provenance


def test_long_import_chain_is_walked(project: ProjectBuilder) -> None:
    length = 1500
    project.write(
        {f"m{index}.ts": f'import "./m{index + 1}";\n' for index in range(length)}
    )
    project.write({f"m{length}.ts": ""})

    result = walk([project.path("m0.ts")])

    assert len(result.files) == length + 1
    assert result.files[:3] == [project.path("m0.ts"), project.path("m1.ts"), project.path("m2.ts")]
    assert result.origins(project.path(f"m{length}.ts")) == [project.path("m0.ts")]
