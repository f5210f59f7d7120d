"""
FabricSkyboxes manifest schema

One manifest describes one ``square-textured`` skybox: six face textures, the
fade window in world ticks and the optional rotation / condition fields.
Fields are declared in the order they are written to disk.

FADE WINDOW:
- startFadeIn..endFadeIn: alpha ramps from 0 to 1
- endFadeIn..startFadeOut: fully visible
- startFadeOut..endFadeOut: alpha ramps from 1 to 0
All four values are ticks in [0, 24000).

AXIS:
Rotation axis in degrees. OptiFine stores it as fractions of a half turn,
so every component is multiplied by 180 on conversion. [0, 0, 180] faces
south and is the default.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

FACES = ("top", "bottom", "north", "south", "east", "west")

Vec3 = List[float]


class SkyboxManifest(BaseModel):
    """A FabricSkyboxes ``square-textured`` skybox definition"""
    model_config = ConfigDict(extra='forbid')

    type: str = Field(default="square-textured", description="Skybox kind.")
    decorations: bool = Field(default=True, description="Render sun, moon and stars.")
    shouldBlend: bool = Field(default=False, description="Blend with the vanilla sky.")

    texture_top: str
    texture_bottom: str
    texture_north: str
    texture_south: str
    texture_east: str
    texture_west: str

    startFadeIn: int
    endFadeIn: int
    startFadeOut: int
    endFadeOut: int

    shouldRotate: Optional[bool] = None
    axis: Vec3 = Field(default_factory=lambda: [0.0, 0.0, 180.0])
    transitionSpeed: Optional[float] = None
    weather: Optional[Union[str, List[str]]] = None
    biomes: Optional[Union[str, List[str]]] = None
    dimensions: str

    @field_validator('axis')
    @classmethod
    def _axis_is_vec3(cls, value: Vec3) -> Vec3:
        if len(value) != 3:
            raise ValueError(f"axis must have 3 components, got {len(value)}")
        return value

    @field_validator('startFadeIn', 'endFadeIn', 'startFadeOut', 'endFadeOut')
    @classmethod
    def _within_day(cls, value: int) -> int:
        if not 0 <= value < 24000:
            raise ValueError(f"fade time {value} outside [0, 24000)")
        return value

    def textures(self) -> List[str]:
        """Face texture references in FACES order"""
        return [getattr(self, f"texture_{face}") for face in FACES]

    def to_json(self) -> str:
        """Pretty-printed JSON with unset optional fields omitted"""
        return self.model_dump_json(indent=2, exclude_none=True)
