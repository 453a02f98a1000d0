"""Half-car suspension model and the damper-tuning objective built on it."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import astuple, dataclass, fields, replace

import numpy as np

from damperopt.psd import compute_psd
from damperopt.road_profile import RoadProfile

_WEIGHT_COMFORT = 0.35
_WEIGHT_VIBRATION = 0.25
_WEIGHT_HANDLING = 0.25
_WEIGHT_CONSTRAINTS = 0.15


@dataclass(frozen=True)
class DamperParameters:
    """Tunable damper and chassis parameters."""

    compression_damping: float  # Ns/m
    rebound_damping: float  # Ns/m
    blowoff: float  # m/s
    gas_pressure: float  # bar
    motion_ratio: float
    inclination: float  # degrees
    knee_point: float  # m/s
    stroke_limit: float  # m
    spring_preload: float  # N
    tire_damping: float  # Ns/m
    anti_roll_stiffness: float  # N/rad

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> DamperParameters:
        """Build parameters from values given in field order."""
        items = tuple(values)
        expected = len(fields(cls))
        if len(items) != expected:
            raise ValueError(f"expected {expected} parameters, got {len(items)}")
        return cls(*(float(v) for v in items))

    def __iter__(self) -> Iterator[float]:
        return iter(astuple(self))


@dataclass(frozen=True)
class SimulationResult:
    """Time histories and peak stroke from one half-car run."""

    accel: np.ndarray
    disp: np.ndarray
    pitch: np.ndarray
    roll: np.ndarray
    tire_force: np.ndarray
    max_stroke: float


def damping_force(
    v_rel: float, c_compression: float, c_rebound: float, blowoff: float, knee_point: float
) -> float:
    """Digressive damper force with blow-off for relative velocity ``v_rel``."""
    c_base = c_rebound if v_rel >= 0 else c_compression
    speed = abs(v_rel)
    if speed > blowoff:
        c_base *= 0.5
    if speed > knee_point:
        c_base *= knee_point / speed
    return -c_base * v_rel


def comfort_cost(accel: Sequence[float] | np.ndarray) -> float:
    """Weighted RMS acceleration; accelerations of 1 m/s^2 or more count 1.4 times."""
    a = np.asarray(accel, dtype=float)
    if a.size == 0:
        raise ValueError("accel must not be empty")
    weights = np.where(np.abs(a) < 1.0, 1.0, 1.4)
    return float(math.sqrt(float(np.sum(a * a * weights)) / a.size))


def vibration_cost(disp: Sequence[float] | np.ndarray, dt: float) -> float:
    """Mean power spectral density of the body displacement between 0.5 and 20 Hz."""
    psd = compute_psd(disp, dt, 0.5, 20.0)
    if psd.size == 0:
        raise ValueError("signal too short to resolve the 0.5-20 Hz band")
    return float(psd.mean())


def handling_cost(
    pitch: Sequence[float] | np.ndarray,
    roll: Sequence[float] | np.ndarray,
    tire_force: Sequence[float] | np.ndarray,
) -> float:
    """Combine peak pitch, peak roll and the worst tire pull into one score."""
    pitch_arr = np.asarray(pitch, dtype=float)
    roll_arr = np.asarray(roll, dtype=float)
    tire_arr = np.asarray(tire_force, dtype=float)
    if pitch_arr.size == 0 or roll_arr.size == 0 or tire_arr.size == 0:
        raise ValueError("histories must not be empty")
    max_pitch = float(np.max(np.abs(pitch_arr)))
    max_roll = float(np.max(np.abs(roll_arr)))
    min_tire = float(np.min(tire_arr))
    tire_term = -min_tire if min_tire < 0 else 0.0
    return 0.4 * max_pitch + 0.4 * max_roll + 0.2 * tire_term


def stroke_penalty(max_stroke: float, stroke_limit: float) -> float:
    """Linear penalty for exceeding the damper stroke limit."""
    if max_stroke > stroke_limit:
        return 1000.0 * (max_stroke - stroke_limit)
    return 0.0


def _as_parameters(params: DamperParameters | Sequence[float]) -> DamperParameters:
    if isinstance(params, DamperParameters):
        return params
    return DamperParameters.from_sequence(params)


class VehicleDynamics:
    """Half-car model with pitch and roll, driven by a road profile."""

    SPRUNG_MASS = 1200.0  # kg
    UNSPRUNG_MASS = 50.0  # kg per wheel
    SPRING_STIFFNESS = 30000.0  # N/m
    TIRE_STIFFNESS = 200000.0  # N/m
    WHEELBASE = 2.5  # m
    TRACK_WIDTH = 1.5  # m
    CG_HEIGHT = 0.5  # m
    GRAVITY = 9.81  # m/s^2
    DT = 0.0005  # s
    SIM_STEPS = 20000

    def __init__(self, road_profile: RoadProfile | None = None) -> None:
        if road_profile is None:
            road_profile = RoadProfile.generate(self.SIM_STEPS, self.DT)
        self.road_profile = road_profile
        self.dt = road_profile.dt
        self.sim_steps = len(road_profile)

    def simulate(self, params: DamperParameters | Sequence[float]) -> SimulationResult:
        """Integrate the half-car over the whole road with explicit Euler steps."""
        p = _as_parameters(params)
        road = self.road_profile
        dt = self.dt
        mass = self.SPRUNG_MASS
        unsprung = self.UNSPRUNG_MASS
        k_tire = self.TIRE_STIFFNESS
        half_wb = self.WHEELBASE / 2
        half_tw = self.TRACK_WIDTH / 2
        rear_delay = self.WHEELBASE / 10.0
        k_spring = self.SPRING_STIFFNESS * (1.0 + p.gas_pressure * 0.01)
        i_y = mass * self.WHEELBASE * self.WHEELBASE / 12
        i_x = mass * self.TRACK_WIDTH * self.TRACK_WIDTH / 12

        z_s = theta = phi = z_uf = z_ur = 0.0
        v_s = omega_y = omega_x = v_uf = v_ur = 0.0
        accel: list[float] = []
        disp: list[float] = []
        pitch: list[float] = []
        roll: list[float] = []
        tire_force: list[float] = []
        max_stroke = 0.0

        for t in range(self.sim_steps):
            z_rf = road.displacement(t, 0.0)
            z_rr = road.displacement(t, rear_delay)

            z_sf = z_s + half_wb * theta - half_tw * phi
            z_sr = z_s - half_wb * theta + half_tw * phi

            v_rel_f = v_s + half_wb * omega_y - half_tw * omega_x - v_uf
            v_rel_r = v_s - half_wb * omega_y + half_tw * omega_x - v_ur

            f_damper_f = damping_force(
                v_rel_f, p.compression_damping, p.rebound_damping, p.blowoff, p.knee_point
            ) * p.motion_ratio
            f_damper_r = damping_force(
                v_rel_r, p.compression_damping, p.rebound_damping, p.blowoff, p.knee_point
            ) * p.motion_ratio

            f_spring_f = -(k_spring * (z_sf - z_uf) + p.spring_preload)
            f_spring_r = -(k_spring * (z_sr - z_ur) + p.spring_preload)

            f_tire_f = -k_tire * (z_uf - z_rf) - p.tire_damping * (v_uf - road.velocity(t, 0.0))
            f_tire_r = -k_tire * (z_ur - z_rr) - p.tire_damping * (
                v_ur - road.velocity(t, rear_delay)
            )

            f_roll = -p.anti_roll_stiffness * phi

            a_s = (f_spring_f + f_spring_r + f_damper_f + f_damper_r) / mass
            alpha_y = (
                (f_spring_f + f_damper_f) * half_wb - (f_spring_r + f_damper_r) * half_wb
            ) / i_y
            alpha_x = ((f_spring_r - f_spring_f) * half_tw + f_roll) / i_x
            a_uf = (-f_spring_f - f_damper_f + f_tire_f) / unsprung
            a_ur = (-f_spring_r - f_damper_r + f_tire_r) / unsprung

            accel.append(a_s)
            disp.append(z_s)
            pitch.append(theta)
            roll.append(phi)
            tire_force.append(min(f_tire_f, f_tire_r))
            max_stroke = max(max_stroke, abs(z_sf - z_uf), abs(z_sr - z_ur))

            v_s += a_s * dt
            omega_y += alpha_y * dt
            omega_x += alpha_x * dt
            v_uf += a_uf * dt
            v_ur += a_ur * dt
            z_s += v_s * dt
            theta += omega_y * dt
            phi += omega_x * dt
            z_uf += v_uf * dt
            z_ur += v_ur * dt

        return SimulationResult(
            accel=np.array(accel),
            disp=np.array(disp),
            pitch=np.array(pitch),
            roll=np.array(roll),
            tire_force=np.array(tire_force),
            max_stroke=max_stroke,
        )

    def evaluate_objective(self, params: DamperParameters | Sequence[float]) -> float:
        """Weighted sum of comfort, vibration, handling and stroke costs (lower is better)."""
        p = _as_parameters(params)
        cos_theta = math.cos(p.inclination * math.pi / 180.0)
        effective = replace(
            p,
            compression_damping=p.compression_damping * p.motion_ratio * cos_theta,
            rebound_damping=p.rebound_damping * p.motion_ratio * cos_theta,
        )
        result = self.simulate(effective)
        return (
            _WEIGHT_COMFORT * comfort_cost(result.accel)
            + _WEIGHT_VIBRATION * vibration_cost(result.disp, self.dt)
            + _WEIGHT_HANDLING * handling_cost(result.pitch, result.roll, result.tire_force)
            + _WEIGHT_CONSTRAINTS * stroke_penalty(result.max_stroke, p.stroke_limit)
        )