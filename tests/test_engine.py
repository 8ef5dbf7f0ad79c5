"""Tests for the script rule engine.

Most cases run the Chinese rule; a parametrised table checks that every
script behaves the same way for the basic literal, template, JSX and comment
shapes.
"""

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.models import Finding, NodeKind, NodeType, RuleOptions
from src.script_check.engine import ScriptRule
from src.script_check.errors import MalformedTreeError, SourceParseError


def _messages(findings: list[Finding]) -> list[str]:
    return [finding.message for finding in findings]


def _check(code: str, script: str = "chinese", **options: object) -> list[Finding]:
    return ScriptRule(script, options).check_source(code)


class TestLiterals:
    def test_no_restricted_text(self) -> None:
        assert _check('console.log("english");') == []
        assert _check("var str = `한국어`;") == []

    def test_string_literal_keeps_quotes_in_message(self) -> None:
        findings = _check('var str = "变量";')
        assert len(findings) == 1
        finding = findings[0]
        assert finding.message == 'Using Chinese characters: "变量"'
        assert finding.excerpt == '"变量"'
        assert finding.node_type is NodeType.LITERAL
        assert finding.kind is NodeKind.STRING_LITERAL
        assert finding.matches == ["变量"]
        assert finding.rule_id == "no-chinese-character"

    def test_one_finding_per_literal_with_every_run(self) -> None:
        findings = _check("console.log('english' + '繁體/*字*/');")
        assert _messages(findings) == ["Using Chinese characters: '繁體/*字*/'"]
        assert findings[0].matches == ["繁體", "字"]

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ('console.log("english" && "//简体字");', '"//简体字"'),
            ("var str = '變數'.substr(0, 1);", "'變數'"),
            ("var obj = { 'key': '物件' };", "'物件'"),
            ('var obj = { "对象": "value" };', '"对象"'),
            ("var func = function(v){return v;}; func('函式');", "'函式'"),
            ('function f(v){return "返回值";}', '"返回值"'),
            ('var ary = ["数组"];', '"数组"'),
        ],
    )
    def test_literal_positions(self, code: str, expected: str) -> None:
        assert _messages(_check(code)) == [f"Using Chinese characters: {expected}"]

    def test_location_uses_character_columns(self) -> None:
        findings = _check("var a = '中'; var b = '文';")
        assert [(f.line, f.column) for f in findings] == [(1, 9), (1, 22)]
        assert (findings[0].end_line, findings[0].end_column) == (1, 12)

    def test_location_on_later_lines(self) -> None:
        findings = _check('var a = 1;\n  var b = "变量";\n')
        assert (findings[0].line, findings[0].column) == (2, 11)

    def test_filename_is_attached(self) -> None:
        findings = ScriptRule("chinese").check_source('x = "变量";', filename="app.js")
        assert findings[0].filename == "app.js"
        assert findings[0].location == "app.js:1:5"


class TestTemplates:
    def test_template_chunks_are_reported_separately(self) -> None:
        findings = _check("var str = `樣板字串`; console.log(`${str}、模板字符串`);")
        assert _messages(findings) == [
            "Using Chinese characters: 樣板字串",
            "Using Chinese characters: 、模板字符串",
        ]
        assert all(f.node_type is NodeType.TEMPLATE_ELEMENT for f in findings)
        assert all(f.kind is NodeKind.TEMPLATE_CHUNK for f in findings)

    def test_interpolated_literals_are_checked_in_source_order(self) -> None:
        findings = _check('var s = `前${"中" + x}後`;')
        assert [f.excerpt for f in findings] == ["前", '"中"', "後"]
        assert [f.node_type for f in findings] == [
            NodeType.TEMPLATE_ELEMENT,
            NodeType.LITERAL,
            NodeType.TEMPLATE_ELEMENT,
        ]

    def test_template_chunk_excerpt_keeps_ascii(self) -> None:
        findings = _check("require(`${basePath}/路径.jsx`);")
        assert _messages(findings) == ["Using Chinese characters: /路径.jsx"]

    def test_template_chunk_location(self) -> None:
        findings = _check("x = `${a}中`;")
        assert (findings[0].line, findings[0].column) == (1, 10)


class TestJsx:
    def test_attribute_string_and_text(self) -> None:
        findings = _check("var tpl = <Hello title='你好'>组件</Hello>")
        assert _messages(findings) == [
            "Using Chinese characters: '你好'",
            "Using Chinese characters: 组件",
        ]
        assert [f.node_type for f in findings] == [NodeType.LITERAL, NodeType.JSX_TEXT]

    def test_jsx_text_is_stripped(self) -> None:
        findings = _check("var tpl = <div>\n    组件\n  </div>;")
        assert [f.excerpt for f in findings] == ["组件"]

    def test_jsx_names_are_not_identifiers(self) -> None:
        findings = _check("var tpl = <组件 标题='x' />;", include_identifier=True)
        assert findings == []


class TestComments:
    def test_comments_are_skipped_by_default(self) -> None:
        assert _check("// 注解") == []
        assert _check("/* 注释 */") == []

    def test_comments_with_include_comment(self) -> None:
        code = """
        // 注解0
        /* 注释1 */
        """
        findings = _check(code, includeComment=True)
        assert _messages(findings) == [
            "Using Chinese characters: 注解0",
            "Using Chinese characters: 注释1",
        ]
        assert [f.node_type for f in findings] == [NodeType.LINE, NodeType.BLOCK]
        assert all(f.kind is NodeKind.COMMENT for f in findings)

    def test_multiline_block_comment(self) -> None:
        findings = _check("/*\n * 注释\n */\nvar a = 1;", includeComment=True)
        assert [f.excerpt for f in findings] == ["* 注释"]
        assert (findings[0].line, findings[0].end_line) == (1, 3)

    def test_comment_inside_excluded_call_is_still_checked(self) -> None:
        findings = _check(
            "i18n.t(/* 注释 */ '文本');",
            includeComment=True,
            excludeArgsForFunctions=["i18n.t"],
        )
        assert _messages(findings) == ["Using Chinese characters: 注释"]


IDENTIFIER_CODE = """
import 標識符0 from 'xyz';
標識符1 = { 標識符2: 0 };
var 標識符3 = function 標識符4() {};
this.標識符5 = 0;
a[標識符6] = 0;
export default 標識符7;
"""


class TestIdentifiers:
    def test_identifiers_are_skipped_by_default(self) -> None:
        assert _check(IDENTIFIER_CODE) == []

    def test_identifiers_with_include_identifier(self) -> None:
        findings = _check(IDENTIFIER_CODE, includeIdentifier=True)
        assert _messages(findings) == [
            f"Using Chinese characters: 標識符{index}" for index in range(8)
        ]
        assert all(f.node_type is NodeType.IDENTIFIER for f in findings)

    def test_shorthand_property(self) -> None:
        findings = _check("var 名 = 1; var o = { 名 };", includeIdentifier=True)
        assert [f.excerpt for f in findings] == ["名", "名"]

    def test_enabling_flags_never_removes_findings(self) -> None:
        code = '// 注解\nvar 变量 = "值"; i18n.t("文本");'
        base = _check(code, excludeArgsForFunctions=["i18n.t"])
        with_flags = _check(
            code,
            includeComment=True,
            includeIdentifier=True,
            excludeArgsForFunctions=["i18n.t"],
        )
        assert len(with_flags) > len(base)
        assert set(_messages(base)) <= set(_messages(with_flags))


class TestExcludedFunctions:
    def test_dotted_paths_are_exempt(self) -> None:
        code = "var value = a.b.c.d('字串'); var tpl = <Hello>{dic('函式')}</Hello>;"
        assert _check(code, excludeArgsForFunctions=["a.b.c.d", "dic"]) == []

    def test_unmatched_function_is_flagged(self) -> None:
        code = "var value = a.b.c.d('字串');"
        assert _messages(_check(code, excludeArgsForFunctions=["unmatched"])) == [
            "Using Chinese characters: '字串'"
        ]
        assert _messages(_check(code, excludeArgsForFunctions=["a.b.c"])) == [
            "Using Chinese characters: '字串'"
        ]

    def test_template_and_string_arguments(self) -> None:
        code = 'var value1 = dic(`樣板字串`); var value2 = i18n.t("字符串"); var value3 = w.x.y.z("字符串")'
        assert _check(code, excludeArgsForFunctions=["dic", "i18n.t", "w.x.y.z"]) == []

    def test_composed_arguments(self) -> None:
        code = """
        var value1 = i18n.t("模板" + "字符串");
        var value2 = i18n.t(isValid ? "模板" : "字符串");
        var value3 = i18n.t(key || "默认值");
        var value4 = i18n.t(key ?? ("默认" + "值"));
        var value5 = i18n.t(`${"插值"}模板`);
        """
        assert _check(code, excludeArgsForFunctions=["i18n.t"]) == []

    def test_composed_arguments_without_option(self) -> None:
        code = """
        var value1 = i18n.t('模板' + '字符串');
        var value2 = i18n.t(isValid ? "模板" : "字符串");
        var value3 = i18n.t(key || "默认值");
        """
        assert _messages(_check(code)) == [
            "Using Chinese characters: '模板'",
            "Using Chinese characters: '字符串'",
            'Using Chinese characters: "模板"',
            'Using Chinese characters: "字符串"',
            'Using Chinese characters: "默认值"',
        ]

    def test_ternary_condition_is_not_composition(self) -> None:
        code = 'i18n.t(x === "条件" ? "是" : "否");'
        assert _messages(_check(code, excludeArgsForFunctions=["i18n.t"])) == [
            'Using Chinese characters: "条件"'
        ]

    def test_nested_unlisted_call_is_flagged(self) -> None:
        code = 'i18n.t(format("格式"));'
        assert _messages(_check(code, excludeArgsForFunctions=["i18n.t"])) == [
            'Using Chinese characters: "格式"'
        ]

    def test_computed_callee_never_matches(self) -> None:
        code = "a['b']('字串');"
        assert len(_check(code, excludeArgsForFunctions=["a.b"])) == 1

    def test_identifier_argument_is_exempt(self) -> None:
        code = "i18n.t(变量);"
        assert _check(code, includeIdentifier=True, excludeArgsForFunctions=["i18n.t"]) == []


class TestModuleImports:
    def test_specifiers_are_flagged_by_default(self) -> None:
        code = "import '模块'; import { doSomething } from '模块/api'; export * from \"模块\";"
        findings = ScriptRule("chinese").check_source(code)
        assert [f.excerpt for f in findings] == ["'模块'", "'模块/api'", '"模块"']

    def test_static_specifiers_are_exempt(self) -> None:
        code = "import '模块'; import { doSomething } from '模块/api'; export { x } from '模块';"
        assert _check(code, excludeModuleImports=True) == []

    def test_dynamic_import_branches(self) -> None:
        code = "import(token ? './模块a.js' : './模块b.js');"
        assert _check(code, excludeModuleImports=True) == []
        assert _messages(_check(code)) == [
            "Using Chinese characters: './模块a.js'",
            "Using Chinese characters: './模块b.js'",
        ]

    def test_dynamic_import_inside_async_function(self) -> None:
        code = """
        async function demo() {
          await import(token ? './模块a.js' : './模块b.js');
        }
        """
        assert _check(code, excludeModuleImports=True) == []

    def test_require_and_import_composition(self) -> None:
        code = (
            'require(`${basePath}/组件.jsx`); require(basePath + "路径/component.jsx");'
            'import(`${basePath}/路径/module.js`); import(basePath + "/组件.jsx").then(cmp => {});'
        )
        assert _check(code, excludeModuleImports=True) == []
        assert len(_check(code)) == 4

    def test_require_listed_as_excluded_function(self) -> None:
        code = 'require(`${basePath}/组件.jsx`); require(basePath + "路径/component.jsx")'
        assert _check(code, excludeArgsForFunctions=["require"]) == []

    def test_interpolated_literal_in_specifier_is_still_checked(self) -> None:
        code = 'import(`${"模块"}/路径/module.js`);'
        assert _messages(_check(code, excludeModuleImports=True)) == [
            'Using Chinese characters: "模块"'
        ]

    def test_only_first_argument_is_a_specifier(self) -> None:
        code = "require('./模块.js', '第二');"
        assert _messages(_check(code, excludeModuleImports=True)) == [
            "Using Chinese characters: '第二'"
        ]

    def test_other_calls_are_not_specifiers(self) -> None:
        code = "load('./模块.js');"
        assert len(_check(code, excludeModuleImports=True)) == 1


SCRIPT_SAMPLES = [
    ("chinese", "Chinese", "中文", "한국어"),
    ("japanese", "Japanese", "日本語", "한국어"),
    ("korean", "Korean", "한국어", "中文"),
    ("greek", "Greek", "Ελληνικά", "Русский"),
    ("russian", "Russian", "Русский", "Ελληνικά"),
    ("thai", "Thai", "ไทย", "Ελληνικά"),
]


@pytest.mark.parametrize(("script", "name", "sample", "other"), SCRIPT_SAMPLES)
class TestEveryScript:
    def test_literal(self, script: str, name: str, sample: str, other: str) -> None:
        findings = _check(f"console.log('english' + '{sample}');", script)
        assert _messages(findings) == [f"Using {name} characters: '{sample}'"]

    def test_template(self, script: str, name: str, sample: str, other: str) -> None:
        findings = _check(f"var tl = `{sample}`", script)
        assert _messages(findings) == [f"Using {name} characters: {sample}"]
        assert findings[0].node_type is NodeType.TEMPLATE_ELEMENT

    def test_jsx(self, script: str, name: str, sample: str, other: str) -> None:
        findings = _check(f"var tpl = <Hello>{sample}</Hello>", script)
        assert _messages(findings) == [f"Using {name} characters: {sample}"]

    def test_other_script_is_ignored(self, script: str, name: str, sample: str, other: str) -> None:
        assert _check(f"var s = '{other}'; // {sample}", script) == []

    def test_excluded_function(self, script: str, name: str, sample: str, other: str) -> None:
        code = f"var v = i18n.t(isValid ? '{sample}' : `{sample}`);"
        assert _check(code, script, excludeArgsForFunctions=["i18n.t"]) == []


class TestErrors:
    def test_strict_parse_error(self) -> None:
        with pytest.raises(SourceParseError) as excinfo:
            _check("var = ;")
        assert excinfo.value.line == 1

    def test_lenient_parse_checks_recovered_tree(self) -> None:
        rule = ScriptRule("chinese")
        findings = rule.check_source('var a = "变量";\nvar = ;', strict=False)
        assert _messages(findings) == ['Using Chinese characters: "变量"']

    def test_malformed_tree(self) -> None:
        fake_tree = SimpleNamespace(root_node=SimpleNamespace(type="ERROR"))
        with pytest.raises(MalformedTreeError):
            ScriptRule("chinese").check_tree(fake_tree, "")  # type: ignore[arg-type]

    def test_invalid_options(self) -> None:
        with pytest.raises(ValueError):
            ScriptRule("chinese", {"unknown": True})

    def test_options_object_is_used_as_is(self) -> None:
        options = RuleOptions(include_comment=True)
        assert ScriptRule("chinese", options).options is options


def test_rule_is_reusable_across_sources() -> None:
    rule = ScriptRule("chinese")
    assert len(rule.check_source('a = "一";')) == 1
    assert len(rule.check_source('b = "二"; c = "三";')) == 2


def test_deep_concatenation_does_not_recurse() -> None:
    code = "var s = " + " + ".join(["'中'"] * 3000) + ";"
    assert len(_check(code)) == 3000
