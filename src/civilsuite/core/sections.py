"""
Section formulas for rectangular RC sections and steel compression members.

Limit state of collapse per IS 456:2000:
- Clause 38.1 / Annex G: Flexure, singly and doubly reinforced
- Clause 40: Shear (constant design shear stress τc = 0.25√fck)
Steel compression per IS 800:2007 Clause 7.1.2.1 (buckling class c).

All functions are stateless.  Moments in N·mm, forces in N, lengths in mm,
stresses in MPa unless noted otherwise.
"""

import math
from typing import Tuple

from ..codes.is456 import IS456
from ..errors import InvalidGeometryError

# Effective cover to compression steel for doubly reinforced sections (mm)
DEFAULT_COMPRESSION_COVER = 50.0

# Imperfection factor for buckling class c
IMPERFECTION_FACTOR = 0.49

# Partial safety factor γm0 for structural steel
GAMMA_M0 = 1.1


def _require_positive(**values: float) -> None:
    for name, value in values.items():
        if value is None or not math.isfinite(value) or value <= 0:
            raise InvalidGeometryError(f"{name} must be a positive number, got {value}")


def moment_of_inertia(b_m: float, d_m: float) -> float:
    """
    Gross second moment of area of a rectangle.

    Args:
        b_m: Width in m
        d_m: Overall depth in m

    Returns:
        I in m⁴
    """
    _require_positive(width=b_m, depth=d_m)
    return b_m * d_m ** 3 / 12.0


def limiting_moment_capacity(fck: float, b: float, d: float) -> float:
    """
    Limiting moment of resistance of a singly reinforced section.

    Mu,lim = 0.138 fck b d²

    Returns:
        Mu,lim in N·mm
    """
    _require_positive(fck=fck, width=b, effective_depth=d)
    return IS456.LIMITING_MOMENT_FACTOR * fck * b * d ** 2


def _singly_reinforced_area(moment: float, fck: float, fy: float, b: float, d: float) -> float:
    # Annex G: Mu = 0.87 fy Ast d (1 - Ast fy / (b d fck))
    k = moment / (fck * b * d ** 2)
    radicand = max(0.0, 1.0 - 4.598 * k)
    lever_factor = 0.5 * (1.0 + math.sqrt(radicand))
    return moment / (0.87 * fy * lever_factor * d)


def doubly_reinforced_steel(
    moment: float,
    fck: float,
    fy: float,
    b: float,
    d: float,
    d_prime: float = DEFAULT_COMPRESSION_COVER,
) -> Tuple[float, float]:
    """
    Tension and compression steel for a moment above Mu,lim.

    Mu,lim is carried by the balanced section; the excess M2 = M - Mu,lim by a
    steel couple of lever arm (d - d') with compression steel stressed to
    0.87 fy.

    Args:
        moment: Design moment in N·mm (must exceed Mu,lim)
        fck: Characteristic concrete strength in MPa
        fy: Steel yield strength in MPa
        b: Width in mm
        d: Effective depth in mm
        d_prime: Effective cover to compression steel in mm

    Returns:
        (Ast, Asc) in mm²

    Raises:
        InvalidGeometryError: If d does not exceed d'
    """
    if d <= d_prime:
        raise InvalidGeometryError(
            f"effective depth {d} mm must exceed compression steel cover {d_prime} mm"
        )
    mu_lim = limiting_moment_capacity(fck, b, d)
    xu_max = IS456.XU_MAX_RATIO * d
    ast1 = mu_lim / (0.87 * fy * (d - IS456.LEVER_ARM_FACTOR * xu_max))
    m2 = moment - mu_lim
    ast2 = m2 / (0.87 * fy * (d - d_prime))
    return ast1 + ast2, ast2


def required_steel_area(
    moment: float,
    fck: float,
    fy: float,
    b: float,
    d: float,
    d_prime: float = DEFAULT_COMPRESSION_COVER,
) -> float:
    """
    Tension steel required for a design moment.

    M ≤ Mu,lim (equality included) uses the singly reinforced quadratic;
    above it the doubly reinforced split is used.

    Args:
        moment: Design moment in N·mm
        fck: Characteristic concrete strength in MPa
        fy: Steel yield strength in MPa
        b: Width in mm
        d: Effective depth in mm
        d_prime: Effective cover to compression steel in mm

    Returns:
        Ast in mm²; 0 for a zero or negative moment

    Raises:
        InvalidGeometryError: For non-positive b, d, fck or fy
    """
    _require_positive(fck=fck, fy=fy, width=b, effective_depth=d)
    if not math.isfinite(moment):
        raise InvalidGeometryError(f"moment must be finite, got {moment}")
    if moment <= 0:
        return 0.0

    if moment <= limiting_moment_capacity(fck, b, d):
        return _singly_reinforced_area(moment, fck, fy, b, d)
    ast, _ = doubly_reinforced_steel(moment, fck, fy, b, d, d_prime)
    return ast


def is_doubly_reinforced(moment: float, fck: float, b: float, d: float) -> bool:
    """True when the moment exceeds Mu,lim."""
    return moment > limiting_moment_capacity(fck, b, d)


def neutral_axis_depth(ast: float, fy: float, fck: float, b: float) -> float:
    """
    Depth of the rectangular stress block from force equilibrium.

    xu = 0.87 fy Ast / (0.36 fck b)
    """
    return 0.87 * fy * ast / (0.36 * fck * b)


def moment_capacity(ast: float, fy: float, fck: float, b: float, d: float) -> float:
    """
    Moment of resistance of a singly reinforced section.

    Over-reinforced sections (xu > xu,max) are capped at Mu,lim.

    Returns:
        Mu in N·mm
    """
    _require_positive(fck=fck, fy=fy, width=b, effective_depth=d)
    if ast <= 0:
        return 0.0
    xu = neutral_axis_depth(ast, fy, fck, b)
    if xu > IS456.XU_MAX_RATIO * d:
        return limiting_moment_capacity(fck, b, d)
    return 0.87 * fy * ast * (d - IS456.LEVER_ARM_FACTOR * xu)


def doubly_reinforced_moment_capacity(
    ast: float,
    asc: float,
    fy: float,
    fck: float,
    b: float,
    d: float,
    d_prime: float = DEFAULT_COMPRESSION_COVER,
) -> float:
    """
    Moment of resistance with compression steel.

    Mu = Mu,lim + 0.87 fy min(Ast - Ast1, Asc) (d - d')

    Falls back to :func:`moment_capacity` when the tension steel does not
    exceed the balanced amount Ast1.
    """
    _require_positive(fck=fck, fy=fy, width=b, effective_depth=d)
    mu_lim = limiting_moment_capacity(fck, b, d)
    xu_max = IS456.XU_MAX_RATIO * d
    ast1 = mu_lim / (0.87 * fy * (d - IS456.LEVER_ARM_FACTOR * xu_max))
    if ast <= ast1 or asc <= 0 or d <= d_prime:
        return moment_capacity(ast, fy, fck, b, d)
    return mu_lim + 0.87 * fy * min(ast - ast1, asc) * (d - d_prime)


def design_shear_stress(fck: float) -> float:
    """τc = 0.25√fck in MPa."""
    return 0.25 * math.sqrt(fck)


def shear_capacity(fck: float, b: float, d: float) -> float:
    """
    Shear resistance of the concrete section.

    Vc = τc b d with τc = 0.25√fck

    Returns:
        Vc in N
    """
    _require_positive(fck=fck, width=b, effective_depth=d)
    return design_shear_stress(fck) * b * d


def buckling_design_stress(slenderness: float, fy: float) -> float:
    """
    Design compressive stress of a steel member.

    ε = √(250/fy), λn = λ/(π² ε),
    φ = 0.5 [1 + α (λn - 0.2) + λn²], χ = 1 / (φ + √(φ² - λn²)),
    fcd = min(χ fy / γm0, fy / γm0)

    Args:
        slenderness: Effective slenderness ratio KL/r
        fy: Yield stress in MPa

    Returns:
        fcd in MPa; 0 when φ² - λn² is negative

    Raises:
        InvalidGeometryError: For a negative slenderness or non-positive fy
    """
    _require_positive(fy=fy)
    if not math.isfinite(slenderness) or slenderness < 0:
        raise InvalidGeometryError(f"slenderness must be a non-negative number, got {slenderness}")

    epsilon = math.sqrt(250.0 / fy)
    lambda_n = slenderness / (math.pi ** 2 * epsilon)
    phi = 0.5 * (1.0 + IMPERFECTION_FACTOR * (lambda_n - 0.2) + lambda_n ** 2)
    radicand = phi ** 2 - lambda_n ** 2
    if radicand < 0:
        chi = 0.0
    else:
        chi = 1.0 / (phi + math.sqrt(radicand))
    return min(chi * fy / GAMMA_M0, fy / GAMMA_M0)
