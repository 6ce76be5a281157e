from notifykit.output.router import dispatch


def test_dispatch_single_config(make_slack, recorder):
    slack = make_slack(token="xoxb-1")
    results = dispatch({"type": "slack", "target": "ops"}, "hello", slack=slack)

    assert len(results) == 1
    assert results[0].success is True
    assert recorder.calls == 1
    assert recorder.payload()["channel"] == "#ops"


def test_dispatch_mixed_targets_in_order(make_slack, mail, mail_transport):
    slack = make_slack()  # unconfigured
    results = dispatch(
        [
            {"type": "email", "target": "dev@example.com"},
            {"type": "slack", "target": "ops"},
            {"type": "pager", "target": "x"},
        ],
        "db-1 down",
        subject="alert",
        mail=mail,
        slack=slack,
    )

    assert [r.channel for r in results] == ["email", "slack", "pager"]
    assert [r.success for r in results] == [True, False, False]
    assert results[2].error == "Unknown output type: pager"
    assert mail_transport.calls[0]["subject"] == "[ops] alert"
    assert mail_transport.calls[0]["body"] == "db-1 down"


def test_dispatch_without_matching_dispatcher(mail):
    results = dispatch([{"type": "slack", "target": "ops"}], "x", mail=mail)
    assert results[0].success is False
    assert results[0].error == "No dispatcher for output type: slack"


def test_dispatch_bad_entry_fails_alone(make_slack, recorder):
    slack = make_slack(token="xoxb-1")
    results = dispatch(
        [{"type": "slack", "target": 5}, {"type": "slack", "target": "ops"}],
        "hi",
        slack=slack,
    )

    assert results[0].success is False
    assert results[0].target == "5"
    assert results[0].error
    assert results[1].success is True
    assert recorder.calls == 1
    assert recorder.payload()["channel"] == "#ops"


def test_dispatch_email_with_non_string_recipients(mail):
    results = dispatch([{"type": "email", "target": [1, 2]}], "hi", mail=mail)
    assert results[0].target == "1, 2"
