from infotree import DecisionTreeClassifier, learn
from infotree.utils import log_message


def test_classifier_uses_logging(capsys, house_descriptor, house_data):
    X, y = house_data

    model = DecisionTreeClassifier(descriptor=house_descriptor, verbose=1)
    model.fit(X, y)

    captured = capsys.readouterr()
    assert "[InfoTree]" in captured.out
    assert "Building tree on 14 samples" in captured.out
    assert "Fitted tree with 5 leaves, depth 2" in captured.out
    assert "best split" not in captured.out


def test_splits_and_leaves_logged_at_level_two(capsys, house_descriptor, house_data):
    X, y = house_data

    DecisionTreeClassifier(descriptor=house_descriptor, verbose=2).fit(X, y)

    out = capsys.readouterr().out
    assert "Depth 0: best split [District]" in out
    assert "leaf Responded" in out
    assert "gain for" not in out


def test_candidate_gains_logged_at_level_three(capsys, house_descriptor, house_data):
    X, y = house_data

    DecisionTreeClassifier(descriptor=house_descriptor, verbose=3).fit(X, y)

    out = capsys.readouterr().out
    assert "gain for HouseType" in out


def test_silent_by_default(capsys, house_descriptor, house_data):
    X, y = house_data

    DecisionTreeClassifier(descriptor=house_descriptor).fit(X, y)
    learn(X, y, [DecisionTreeClassifier(descriptor=house_descriptor)], random_state=0)

    assert capsys.readouterr().out == ""


def test_learner_logs_accuracy(capsys, house_descriptor, house_data):
    X, y = house_data

    learn(X, y, [DecisionTreeClassifier(descriptor=house_descriptor, verbose=1)], random_state=0)

    assert "Estimator 0" in capsys.readouterr().out


def test_log_message_respects_level(capsys):
    log_message("hidden", verbose=1, level=2)
    log_message("shown", verbose=2, level=2)

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "[InfoTree] shown" in out
    assert out.count("[InfoTree]") == 1
