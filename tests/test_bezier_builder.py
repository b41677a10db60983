"""Tests for the BezierShapeBuilder interaction state machine."""

import pytest

from bezier_builder import BezierShapeBuilder
from config import KEY_BACKSPACE, KEY_DELETE
from model import BuildMode, EventTopic, InteractionState, KeyEvent, PointerEvent


def click_at(builder: BezierShapeBuilder, surface, x: float, y: float):
    surface.move_mouse(x, y)
    builder.update(surface)
    builder.handle_event(EventTopic.MOUSE_CLICKED, PointerEvent(x, y))


def hover(builder: BezierShapeBuilder, surface, x: float, y: float):
    surface.move_mouse(x, y)
    builder.update(surface)


class TestAddPoint:
    def test_click_appends_pointer(self, surface):
        builder = BezierShapeBuilder()
        click_at(builder, surface, 10, 20)
        click_at(builder, surface, 30, 40)
        assert builder.bezier.vertices == [(10, 20), (30, 40)]
        assert builder.undo_storage == [[], []]
        assert builder.state == InteractionState.NEUTRAL

    def test_click_ignored_in_other_modes(self, surface):
        builder = BezierShapeBuilder(build_mode=BuildMode.EDIT_POINT)
        click_at(builder, surface, 10, 20)
        assert builder.bezier.vertices == []
        assert builder.undo_storage == []

    def test_four_clicks_make_a_segment(self, surface):
        builder = BezierShapeBuilder()
        for x, y in [(0, 0), (10, 0), (20, 10), (30, 10)]:
            click_at(builder, surface, x, y)
        assert builder.get_rectangular_boundary() == (0, 30, 10, 0)


class TestEditPoint:
    def test_drag_vertex(self, edit_builder, surface):
        hover(edit_builder, surface, 20, 0)
        edit_builder.handle_event(EventTopic.MOUSE_PRESSED, PointerEvent(20, 0))
        assert edit_builder.state == InteractionState.DRAG
        assert edit_builder.get_interacting() == 1

        hover(edit_builder, surface, 25, 30)
        assert edit_builder.bezier.get_vertex(1) == (25, 30)

        surface.move_mouse(26, 31)
        edit_builder.set_mouse(26, 31)
        edit_builder.handle_event(EventTopic.MOUSE_RELEASED, PointerEvent(26, 31))
        assert edit_builder.bezier.get_vertex(1) == (26, 31)
        assert edit_builder.state == InteractionState.NEUTRAL
        assert edit_builder.get_interacting() == -1

    def test_press_away_from_vertices(self, edit_builder, surface):
        hover(edit_builder, surface, 200, 200)
        edit_builder.press()
        assert edit_builder.state == InteractionState.NEUTRAL
        assert edit_builder.get_interacting() == -1
        hover(edit_builder, surface, 0, 0)
        assert edit_builder.bezier.get_vertex(0) == (0, 0)

    def test_release_without_press(self, edit_builder, surface):
        before = list(edit_builder.bezier.vertices)
        hover(edit_builder, surface, 20, 0)
        edit_builder.release()
        assert edit_builder.bezier.vertices == before
        assert edit_builder.state == InteractionState.NEUTRAL

    def test_drag_updates_boundary(self, edit_builder, surface):
        hover(edit_builder, surface, 60, 20)
        edit_builder.press()
        hover(edit_builder, surface, 100, 20)
        assert edit_builder.get_rectangular_boundary()[1] == 100

    def test_cancel_interaction_drops_drag(self, edit_builder, surface):
        hover(edit_builder, surface, 20, 0)
        edit_builder.press()
        edit_builder.cancel_interaction()
        assert edit_builder.state == InteractionState.NEUTRAL
        assert edit_builder.get_interacting() == -1
        hover(edit_builder, surface, 90, 90)
        assert edit_builder.bezier.get_vertex(1) == (20, 0)


class TestMove:
    def test_drag_shifts_by_frame_delta(self, edit_builder, surface):
        edit_builder.set_mode(BuildMode.MOVE)
        hover(edit_builder, surface, 5, 5)
        edit_builder.press()
        assert edit_builder.state == InteractionState.DRAG
        assert edit_builder.get_interacting() == -1

        hover(edit_builder, surface, 15, 10)
        hover(edit_builder, surface, 20, 20)
        assert edit_builder.bezier.get_vertex(0) == (15, 15)

        edit_builder.release()
        assert edit_builder.state == InteractionState.NEUTRAL
        # No movement since the last frame, so release adds nothing
        assert edit_builder.bezier.get_vertex(0) == (15, 15)

    def test_release_applies_pending_delta(self, edit_builder, surface):
        edit_builder.set_mode(BuildMode.MOVE)
        hover(edit_builder, surface, 0, 0)
        edit_builder.press()
        edit_builder.set_mouse(4, -2)
        edit_builder.release()
        assert edit_builder.bezier.get_vertex(0) == (4, -2)


class TestHover:
    def test_strictly_inside_vertex_size(self, edit_builder, surface):
        hover(edit_builder, surface, 24.9, 0)
        assert edit_builder.get_hover_index() == 1
        hover(edit_builder, surface, 25, 0)
        assert edit_builder.get_hover_index() == -1

    def test_first_match_wins(self, surface):
        builder = BezierShapeBuilder(vertex_size=5)
        builder.set_vertices([(0, 0), (2, 0)])
        # Closer to vertex 1, yet vertex 0 is reported
        hover(builder, surface, 1.9, 0)
        assert builder.get_hover_index() == 0

    def test_no_vertices(self, surface):
        builder = BezierShapeBuilder()
        hover(builder, surface, 0, 0)
        assert builder.get_hover_index() == -1


class TestDeleteAndUndo:
    def test_backspace_removes_hovered_vertex(self, edit_builder, surface):
        hover(edit_builder, surface, 40, 20)
        edit_builder.handle_event(EventTopic.KEY_PRESSED, KeyEvent(KEY_BACKSPACE))
        assert edit_builder.bezier.vertices == [(0, 0), (20, 0), (60, 20)]
        assert edit_builder.undo_storage == [[(40, 20)]]

    def test_other_keys_ignored(self, edit_builder, surface):
        hover(edit_builder, surface, 40, 20)
        edit_builder.key_press(KeyEvent(65))
        assert edit_builder.bezier.get_n_vertices() == 4
        assert edit_builder.undo_storage == []

    def test_delete_key_removes_hovered_vertex(self, edit_builder, surface):
        hover(edit_builder, surface, 40, 20)
        edit_builder.key_press(KeyEvent(KEY_DELETE))
        assert edit_builder.bezier.vertices == [(0, 0), (20, 0), (60, 20)]
        assert edit_builder.undo_storage == [[(40, 20)]]

    def test_backspace_without_hover(self, edit_builder, surface):
        hover(edit_builder, surface, 300, 300)
        edit_builder.key_press(KeyEvent(KEY_BACKSPACE))
        assert edit_builder.bezier.get_n_vertices() == 4

    def test_undo_add(self, surface):
        builder = BezierShapeBuilder()
        click_at(builder, surface, 1, 1)
        click_at(builder, surface, 2, 2)
        builder.undo()
        assert builder.bezier.vertices == [(1, 1)]

    def test_undo_delete_appends_at_end(self, edit_builder, surface):
        hover(edit_builder, surface, 20, 0)
        edit_builder.key_press(KeyEvent(KEY_BACKSPACE))
        edit_builder.undo()
        assert edit_builder.bezier.vertices == [(0, 0), (40, 20), (60, 20), (20, 0)]
        assert edit_builder.undo_storage == []

    def test_undo_empty_stack(self, edit_builder):
        edit_builder.undo()
        assert edit_builder.bezier.get_n_vertices() == 4

    def test_undo_everything(self, surface):
        builder = BezierShapeBuilder()
        for x, y in [(0, 0), (50, 0), (100, 0), (150, 0)]:
            click_at(builder, surface, x, y)
        builder.set_mode(BuildMode.EDIT_POINT)
        hover(builder, surface, 50, 0)
        builder.key_press(KeyEvent(KEY_BACKSPACE))
        assert builder.bezier.vertices == [(0, 0), (100, 0), (150, 0)]

        builder.undo()
        assert builder.bezier.vertices == [(0, 0), (100, 0), (150, 0), (50, 0)]
        while builder.undo_storage:
            builder.undo()
        assert builder.bezier.vertices == []
        assert builder.get_rectangular_boundary() == (None, None, None, None)


class TestDrawing:
    def test_draw_vertices_colors(self, edit_builder, surface):
        edit_builder.draw_vertices(surface)
        assert surface.of('fill') == [(255,), (255, 0, 0), (255, 0, 0), (255,)]
        assert surface.of('ellipse')[2] == (40, 20, 5, 5)

    def test_hidden_vertices(self, edit_builder, surface):
        edit_builder.set_show_vertices(False)
        edit_builder.draw(surface)
        assert 'ellipse' not in surface.names()
        assert 'bezier_vertex' in surface.names()

    def test_vertex_guide(self, edit_builder, surface):
        edit_builder.draw_vertex_guide(surface)
        assert surface.of('line') == [(0, 0, 20, 0), (20, 0, 40, 20), (40, 20, 60, 20)]


class TestPassThrough:
    def test_clear_vertices(self, edit_builder):
        edit_builder.clear_vertices()
        assert edit_builder.get_dim() == (None, None)

    def test_scale_and_shift(self, edit_builder):
        edit_builder.scale(2)
        assert edit_builder.get_dim() == pytest.approx((120, 40))
        edit_builder.shift(10, 0)
        assert edit_builder.get_rectangular_boundary()[3] == pytest.approx(-20)

    def test_unknown_topic_ignored(self, edit_builder):
        edit_builder.handle_event('mouseWheel', None)
        assert edit_builder.state == InteractionState.NEUTRAL
