
# Import the base shape class
from .base_shape import Shape, MOVING, SCALING, DOUBLE_CLICK

# Import the specific shape subclasses
from .rectangle import Rectangle
from .frame import Frame
from .placeholder import Placeholder
from .picture import Picture
