# Core calculation engine
from .beam import BeamDesigner, beam_forces, solve_beam
from .column import ColumnDesigner, solve_column
from .diagrams import DiagramPoint, InteractionCurve, MomentDiagram, ShearDiagram
from .footing import FootingDesigner, solve_footing
from .mix_design import ConcreteMixDesigner, solve_concrete_mix
from .retaining_wall import RetainingWallDesigner, solve_retaining_wall
from .slab import SlabDesigner, solve_slab
from .solvers import DESIGNERS, MemberType, solve
from .staircase import StaircaseDesigner, solve_staircase
from .steel import SteelSectionDesigner, solve_steel_section
from .water_tank import WaterTankDesigner, solve_water_tank
