from factory import FrameFactory, FrameOptions
from model import FrameRegistry
from shapes import Frame, Placeholder, DOUBLE_CLICK


def test_default_frame(surface):
    registry = FrameRegistry()
    frame = FrameFactory(surface, registry).create_frame()

    assert (frame.left, frame.top, frame.width, frame.height) == (200, 200, 300, 200)
    record = registry.get(frame.id)
    assert record.frame is frame
    assert record.image is None
    assert isinstance(record.placeholder, Placeholder)
    assert record.placeholder.center == (350, 300)
    assert record.placeholder.text == 'Click to add image'
    assert record.placeholder.visible
    assert surface.objects == [frame, record.placeholder]


def test_frame_styling_and_flags(surface):
    frame = FrameFactory(surface, FrameRegistry()).create_frame()
    assert isinstance(frame, Frame)
    assert frame.lock_rotation
    assert not frame.lock_movement_x and not frame.lock_movement_y
    assert frame.has_controls and frame.selectable
    assert frame.corner_radius > 0
    assert frame.shadow_offset == (0, 4)


def test_options_and_overrides(surface):
    registry = FrameRegistry()
    factory = FrameFactory(surface, registry)
    frame = factory.create_frame(FrameOptions(left=10, top=20, width=100, height=50, label='Drop here'),
                                 width=120)
    record = registry.get(frame.id)
    assert (frame.left, frame.top, frame.width, frame.height) == (10, 20, 120, 50)
    assert record.placeholder.text == 'Drop here'
    assert record.placeholder.center == (70, 45)


def test_rapid_creation_yields_unique_ids(surface):
    registry = FrameRegistry()
    factory = FrameFactory(surface, registry)
    frames = [factory.create_frame() for _ in range(50)]
    assert len({f.id for f in frames}) == 50
    assert len(registry) == 50


def test_placeholder_follows_frame(surface):
    registry = FrameRegistry()
    frame = FrameFactory(surface, registry).create_frame()
    placeholder = registry.get(frame.id).placeholder

    frame.move(50, -20)
    assert placeholder.center == (400, 280)

    frame.resize('se', 100, 40)
    assert (frame.width, frame.height) == (400, 240)
    assert placeholder.center == (450, 300)


def test_double_click_activates_with_frame(surface):
    activated = []
    factory = FrameFactory(surface, FrameRegistry(), on_double_activation=activated.append)
    frame = factory.create_frame()
    frame.fire(DOUBLE_CLICK, x=300, y=300)
    assert activated == [frame]


def test_double_click_without_handler_is_harmless(surface):
    frame = FrameFactory(surface, FrameRegistry()).create_frame()
    frame.fire(DOUBLE_CLICK)
