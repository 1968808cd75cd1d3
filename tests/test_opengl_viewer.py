import pytest

viewer = pytest.importorskip("scanfill.opengl_viewer")


class FakeViewer:
    shading_model = 'flat'
    objects = []
    show_light_representation = False
    camera_distance = 400.0
    camera_rot_x = 30.0
    camera_rot_y = 45.0
    light_position = [200.0, 150.0, 100.0, 1.0]

    def __init__(self, calls):
        self.calls = calls

    def _apply_projection(self):
        self.calls.append("projection")

    def _apply_lighting(self):
        self.calls.append("lighting")


@pytest.fixture
def gl_calls(monkeypatch):
    calls = []
    for name in ("glClear", "glLoadIdentity", "glShadeModel", "glPushMatrix", "glPopMatrix",
                 "glDisable", "glEnable", "glColor3f", "glBegin", "glEnd", "glVertex3f"):
        monkeypatch.setattr(viewer, name, lambda *args: None)
    monkeypatch.setattr(viewer, "glTranslatef", lambda *args: calls.append(("translate", args)))
    monkeypatch.setattr(viewer, "glRotatef", lambda *args: calls.append(("rotate", args)))
    return calls


def test_light_position_is_set_after_camera_transform(gl_calls):
    viewer.OpenGLViewer.paintGL(FakeViewer(gl_calls))
    steps = [c if isinstance(c, str) else c[0] for c in gl_calls]
    assert steps == ["projection", "translate", "rotate", "rotate", "lighting"]


def test_light_marker_is_drawn_in_world_space(gl_calls):
    viewer.OpenGLViewer._draw_light_representation(FakeViewer(gl_calls))
    assert gl_calls == [("translate", (200.0, 150.0, 100.0))]
