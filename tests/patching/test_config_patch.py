"""tsconfig and eslint configuration patches."""

from __future__ import annotations

from ts_scaffold import jsonc
from ts_scaffold.config_patch import enable_internal_regex, patch_tsconfig, tsconfig_patches
from ts_scaffold.options import TEMPLATES_DIR

COMMON_TSCONFIG = (TEMPLATES_DIR / "common" / "tsconfig.json").read_text()
MEMBER_TSCONFIG = (TEMPLATES_DIR / "package" / "tsconfig.json").read_text()
ESLINT_CONFIG = (TEMPLATES_DIR / "root" / "doteslintrc.cjs").read_text()


class TestTsconfig_1:
    def test_1_build_settings_and_paths(self) -> None:
        patched = jsonc.loads(patch_tsconfig(COMMON_TSCONFIG, "@foo"))

        assert patched["extends"] == "@sindresorhus/tsconfig"
        assert patched["compilerOptions"]["outDir"] == "dist"
        assert patched["compilerOptions"]["rootDir"] == "."
        assert patched["compilerOptions"]["paths"] == {"@foo/*": ["../*/src"]}
        assert patched["include"] == ["src"]

    def test_2_comments_survive(self) -> None:
        assert "// Keep src/ in the output path" in patch_tsconfig(COMMON_TSCONFIG, "@foo")

    def test_3_no_scope_no_paths(self) -> None:
        assert "paths" not in jsonc.loads(patch_tsconfig(COMMON_TSCONFIG))["compilerOptions"]

    def test_4_skip_setup_only_adds_paths(self) -> None:
        patched = jsonc.loads(patch_tsconfig(MEMBER_TSCONFIG, "@foo", skip_setup=True))

        assert patched["include"] == ["src", "test"]
        assert "outDir" not in patched["compilerOptions"]
        assert patched["compilerOptions"]["paths"] == {"@foo/*": ["../*/src"]}

    def test_5_skip_setup_without_scope_changes_nothing(self) -> None:
        assert tsconfig_patches("", skip_setup=True) == []
        assert patch_tsconfig(MEMBER_TSCONFIG, skip_setup=True) == MEMBER_TSCONFIG

    def test_6_patching_twice_is_stable(self) -> None:
        once = patch_tsconfig(COMMON_TSCONFIG, "@foo")
        assert patch_tsconfig(once, "@foo") == once


class TestEslint_2:
    def test_1_enables_internal_regex(self) -> None:
        patched = enable_internal_regex(ESLINT_CONFIG, "@foo")

        assert '"import/internal-regex": "^@foo/*",' in patched
        assert '// "import/internal-regex"' not in patched
        assert len(patched) == len(ESLINT_CONFIG) - len("// ") + len("@foo") - len("@scope")

    def test_2_missing_placeholder_is_a_no_op(self) -> None:
        text = "module.exports = {\n    root: true,\n};\n"
        assert enable_internal_regex(text, "@foo") == text

    def test_3_empty_scope_is_a_no_op(self) -> None:
        assert enable_internal_regex(ESLINT_CONFIG, "") == ESLINT_CONFIG
