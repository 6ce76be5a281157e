from notifykit.core.template import Template, render


def test_substitutes_variables():
    assert render("Hello {{name}}, you have {{count}} alerts", {"name": "Ana", "count": 3}) == (
        "Hello Ana, you have 3 alerts"
    )


def test_missing_variable_becomes_empty():
    assert render("Hi {{name}}!", {}) == "Hi !"
    assert render("Hi {{name}}!", {"name": None}) == "Hi !"


def test_tolerates_spaces_in_braces():
    assert render("{{ name }}", {"name": "x"}) == "x"


def test_rerender_of_expanded_output_is_noop():
    once = render("{{#if up}}UP {{/if}}{{host}}: {{#each tags}}{{this}},{{/each}}", {
        "up": True,
        "host": "db-1",
        "tags": ["a", "b"],
    })
    assert once == "UP db-1: a,b,"
    assert render(once, {"host": "other"}) == once


def test_if_block_without_key_is_removed():
    assert render("a{{#if k}}X{{/if}}b", {}) == "ab"


def test_if_block_with_truthy_key_is_kept():
    assert render("{{#if k}}X{{/if}}", {"k": "yes"}) == "X"
    assert render("{{#if k}}X{{/if}}", {"k": 1}) == "X"
    assert render("{{#if k}}X{{/if}}", {"k": [0]}) == "X"


def test_if_block_with_falsy_values_is_removed():
    for value in ("", 0, [], {}, False, None):
        assert render("{{#if k}}X{{/if}}", {"k": value}) == ""


def test_if_body_variables_are_substituted():
    assert render("{{#if user}}by {{user}}{{/if}}", {"user": "bob"}) == "by bob"


def test_each_repeats_body_in_order():
    items = [1, "two", 3.5]
    assert render("{{#each k}}{{this}};{{/each}}", {"k": items}) == "1;two;3.5;"


def test_each_accepts_tuples():
    assert render("{{#each k}}[{{this}}]{{/each}}", {"k": ("x", "y")}) == "[x][y]"


def test_each_over_non_sequence_is_empty():
    assert render("a{{#each k}}{{this}}{{/each}}b", {"k": "abc"}) == "ab"
    assert render("a{{#each k}}{{this}}{{/each}}b", {}) == "ab"
    assert render("a{{#each k}}{{this}}{{/each}}b", {"k": []}) == "ab"


def test_multiline_blocks():
    template = "Report:\n{{#each lines}}- {{this}}\n{{/each}}{{#if footer}}\n--\n{{footer}}{{/if}}"
    assert render(template, {"lines": ["a", "b"], "footer": "bye"}) == "Report:\n- a\n- b\n\n--\nbye"


def test_unterminated_blocks_are_left_alone():
    assert render("{{#if k}}X", {"k": True}) == "{{#if k}}X"
    assert render("{{#each k}}{{this}}", {"k": [1]}) == "{{#each k}}"


def test_template_object_is_reusable():
    template = Template("Deploy {{version}} {{#if ok}}succeeded{{/if}}")
    assert template.render({"version": "1.2", "ok": True}) == "Deploy 1.2 succeeded"
    assert template.render({"version": "1.3"}) == "Deploy 1.3 "
    assert template.source == "Deploy {{version}} {{#if ok}}succeeded{{/if}}"


def test_loop_items_are_inserted_literally():
    data = {"secret": "S3", "items": ["{{secret}}", "{{#if secret}}x{{/if}}"]}
    assert render("{{#each items}}<{{this}}>{{/each}}", data) == "<{{secret}}><{{#if secret}}x{{/if}}>"


def test_loop_body_variables_are_still_substituted():
    data = {"sep": "|", "items": ["a", "b"]}
    assert render("{{#each items}}{{this}}{{sep}}{{/each}}", data) == "a|b|"
