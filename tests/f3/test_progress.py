"""Tests for learner progress (F3)."""

import json

import pytest

from academy.core.progress import (
    PROGRESS_FILENAME,
    PROGRESS_SCHEMA,
    LearnerProgress,
    ProgressState,
    calculate_percentage,
    get_learning_path,
    get_section_progress,
    load_progress_state,
    save_progress_state,
)


class TestCalculatePercentage:
    """Tests for calculate_percentage function."""

    @pytest.mark.parametrize(
        "completed, total, expected",
        [
            (0, 3, 0),
            (1, 3, 33),
            (2, 3, 67),
            (3, 3, 100),
            (1, 8, 13),
            (0, 0, 0),
        ],
    )
    def test_percentages(self, completed, total, expected):
        assert calculate_percentage(completed, total) == expected


class TestSectionProgress:
    """Tests for get_section_progress function."""

    def test_nothing_completed(self, content_dir):
        progress = get_section_progress("apex", content_dir)
        assert progress.to_dict() == {"completed": 0, "total": 3, "percentage": 0}

    def test_counts_only_section_topics(self, content_dir):
        """Completed slugs from other sections or unknown slugs are ignored."""
        progress = get_section_progress("apex", content_dir, ["variables", "intro", "ghost"])
        assert progress.completed == 1
        assert progress.percentage == 33

    def test_never_exceeds_total(self, content_dir):
        progress = get_section_progress(
            "apex", content_dir, ["variables", "loops", "triggers", "variables"]
        )
        assert progress.completed == 3
        assert progress.percentage == 100

    def test_empty_section(self, content_dir):
        progress = get_section_progress("integration", content_dir, ["variables"])
        assert progress.to_dict() == {"completed": 0, "total": 0, "percentage": 0}


class TestLearningPath:
    """Tests for get_learning_path function."""

    def test_new_learner_starts_at_first_topic(self, content_dir):
        path = get_learning_path("apex", content_dir)
        assert path.current.slug == "variables"
        assert path.previous is None
        assert path.next.slug == "loops"
        assert path.progress == 33

    def test_first_incomplete_topic_is_current(self, content_dir):
        path = get_learning_path("apex", content_dir, ["variables"])
        assert path.current.slug == "loops"
        assert path.previous.slug == "variables"
        assert path.next.slug == "triggers"
        assert path.progress == 67

    def test_skipped_topic_is_current(self, content_dir):
        """A gap in the completed list is where the learner resumes."""
        path = get_learning_path("apex", content_dir, ["variables", "triggers"])
        assert path.current.slug == "loops"

    def test_all_completed_stays_on_last(self, content_dir):
        path = get_learning_path("apex", content_dir, ["variables", "loops", "triggers"])
        assert path.current.slug == "triggers"
        assert path.next is None
        assert path.progress == 100

    def test_empty_section(self, content_dir):
        path = get_learning_path("integration", content_dir)
        assert path.current is None
        assert path.progress == 0


class TestLearnerProgress:
    """Tests for LearnerProgress operations."""

    def test_mark_completed(self):
        learner = LearnerProgress(learner_id="ana")
        assert learner.mark_completed("loops") is True
        assert learner.mark_completed("loops") is False
        assert learner.completed_topics == ["loops"]
        assert learner.last_visited

    def test_unmark_completed(self):
        learner = LearnerProgress(learner_id="ana", completed_topics=["loops"])
        assert learner.unmark_completed("loops") is True
        assert learner.unmark_completed("loops") is False
        assert learner.completed_topics == []

    def test_toggle_bookmark(self):
        learner = LearnerProgress(learner_id="ana")
        assert learner.toggle_bookmark("loops") is True
        assert learner.bookmarked_topics == ["loops"]
        assert learner.toggle_bookmark("loops") is False
        assert learner.bookmarked_topics == []


class TestProgressState:
    """Tests for ProgressState."""

    def test_get_or_create(self):
        state = ProgressState()
        learner = state.get_or_create("ana")
        assert state.get_or_create("ana") is learner
        assert state.get("bob") is None

    def test_completed_for(self):
        state = ProgressState()
        state.get_or_create("ana").mark_completed("loops")
        assert state.completed_for("ana") == ["loops"]
        assert state.completed_for("bob") == []
        assert state.completed_for(None) == []

    def test_to_dict_has_schema(self):
        state = ProgressState()
        state.get_or_create("ana")
        data = state.to_dict()
        assert data["$schema"] == PROGRESS_SCHEMA
        assert data["learners"][0]["learner_id"] == "ana"


class TestPersistence:
    """Tests for load_progress_state / save_progress_state."""

    def test_missing_file_is_fresh_state(self, tmp_path):
        state = load_progress_state(tmp_path)
        assert state.learners == {}

    def test_save_and_load(self, tmp_path):
        state = ProgressState()
        learner = state.get_or_create("ana")
        learner.mark_completed("variables")
        learner.toggle_bookmark("loops")

        path = save_progress_state(state, tmp_path / "state")
        assert path == tmp_path / "state" / PROGRESS_FILENAME

        loaded = load_progress_state(tmp_path / "state")
        ana = loaded.get("ana")
        assert ana.completed_topics == ["variables"]
        assert ana.bookmarked_topics == ["loops"]
        assert ana.last_visited == learner.last_visited

    def test_default_state_dir(self, data_dir):
        """Without an argument the data dir's state/ is used."""
        state = ProgressState()
        state.get_or_create("ana")
        path = save_progress_state(state)
        assert path == data_dir / "state" / PROGRESS_FILENAME
        assert load_progress_state().get("ana") is not None

    def test_corrupted_file_is_fresh_state(self, tmp_path):
        (tmp_path / PROGRESS_FILENAME).write_text("{not json", encoding="utf-8")
        assert load_progress_state(tmp_path).learners == {}

    def test_wrong_schema_is_fresh_state(self, tmp_path):
        (tmp_path / PROGRESS_FILENAME).write_text(
            json.dumps({"$schema": "other_v9", "learners": [{"learner_id": "ana"}]}),
            encoding="utf-8",
        )
        assert load_progress_state(tmp_path).learners == {}
