# damperopt

Tune the shock absorbers of a passenger car. The package simulates the car
over a random rough road and searches the parameter space with Bayesian
optimisation.

Each candidate set of eleven damper and suspension parameters is scored by
driving a half-car model over a generated road. The model covers body heave,
pitch and roll, and the front and rear unsprung masses. The score is a
weighted sum of four costs, and lower is better:

| Weight | Cost | Computed from |
|--------|------|---------------|
| 0.35 | comfort | RMS of body acceleration; samples of 1 m/s² or more are weighted 1.4 |
| 0.25 | vibration | mean power spectral density of body displacement between 0.5 and 20 Hz |
| 0.25 | handling | 0.4 × peak pitch + 0.4 × peak roll + 0.2 × the most negative tyre force |
| 0.15 | stroke | 1000 × the amount by which suspension travel exceeds the stroke limit |

The optimiser first evaluates uniformly random points within the parameter
bounds. On each later step it fits a surrogate model to the scores seen so
far. It then draws a batch of random candidates and evaluates the one with
the highest expected improvement.

## Installation

From a checkout of the project:

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Command line

```
damperopt
```

By default this runs 15 random initial evaluations followed by 50
optimisation steps, and prints progress as it goes. At the end it prints the
best objective value and the parameters that produced it.

Options:

| Option | Default | Meaning |
|--------|---------|---------|
| `--initial N` | 15 | number of random starting evaluations (at least 1) |
| `--iterations N` | 50 | number of guided evaluations (not negative) |
| `--surrogate {gp,kernel}` | `kernel` | surrogate used for expected improvement |
| `--candidates N` | 2000 for `kernel`, 1000 for `gp` | random candidates scored per step |
| `--steps N` | 20000 | simulation steps, at 0.5 ms each (at least 2) |
| `--seed N` | none | seed for the road and the search, so that runs can be repeated |

The road is generated once per run, and every evaluation in that run uses
the same road.

The parameters and their search ranges are:

| Parameter           | Range          | Unit  |
|---------------------|----------------|-------|
| C_c (compression)   | 500 – 5000     | Ns/m  |
| C_r (rebound)       | 1000 – 8000    | Ns/m  |
| Blow-off            | 0.5 – 2.0      | m/s   |
| Gas Pressure        | 5 – 20         | bar   |
| Motion Ratio        | 0.5 – 1.5      |       |
| Inclination         | 0 – 30         | deg   |
| Knee Point          | 0 – 2.0        | m/s   |
| Stroke Limit        | 0.05 – 0.1     | m     |
| Spring Preload      | 0 – 1000       | N     |
| Tire Damping        | 50 – 500       | Ns/m  |
| Anti-roll Stiffness | 1000 – 10000   | N/rad |

## Library use

```python
import numpy as np

from damperopt.optimizer import BayesianOptimization, ParameterBounds
from damperopt.road_profile import RoadProfile
from damperopt.surrogate import GaussianProcess
from damperopt.vehicle_dynamics import VehicleDynamics

rng = np.random.default_rng(42)
road = RoadProfile.generate(20000, 0.0005, rng)
car = VehicleDynamics(road)

bounds = [
    ParameterBounds(500.0, 5000.0),
    ParameterBounds(1000.0, 8000.0),
    ParameterBounds(0.5, 2.0),
    ParameterBounds(5.0, 20.0),
    ParameterBounds(0.5, 1.5),
    ParameterBounds(0.0, 30.0),
    ParameterBounds(0.0, 2.0),
    ParameterBounds(0.05, 0.1),
    ParameterBounds(0.0, 1000.0),
    ParameterBounds(50.0, 500.0),
    ParameterBounds(1000.0, 10000.0),
]

opt = BayesianOptimization(
    bounds,
    car.evaluate_objective,
    surrogate=GaussianProcess(1.0, 1.0, 0.1),
    n_candidates=1000,
    rng=rng,
)
opt.initialize(10)
opt.optimize(20)
params, value = opt.best()
```

`BayesianOptimization` also exposes `samples` and `values` for every point
evaluated so far, and `expected_improvement(x, best_y)`. Calling `optimize`
before `initialize`, or `best` before any evaluation, raises `RuntimeError`.

### Modules

- `damperopt.surrogate` provides two surrogate models:
  - `GaussianProcess(length_scale, sigma_f, sigma_n)` is a Gaussian-process
    regressor with an RBF kernel. Its defaults are 1.0, 1.0 and 0.1.
  - `KernelAverage` is a Gaussian-weighted average of the observed values.
    It always reports a variance of 1.0.
- `damperopt.vehicle_dynamics` contains the simulation and its costs:
  - `VehicleDynamics` takes a road, and generates a random one if none is
    given. `simulate(params)` returns a `SimulationResult` with the
    acceleration, displacement, pitch, roll and tyre-force histories and the
    peak stroke. `evaluate_objective(params)` returns the weighted score.
  - Parameters may be passed as a `DamperParameters` or as a sequence of
    eleven numbers in the order of the table above.
  - `evaluate_objective` scales both damping coefficients by the motion
    ratio and by the cosine of the inclination before it simulates.
  - The individual costs are available as `damping_force`, `comfort_cost`,
    `vibration_cost`, `handling_cost` and `stroke_penalty`.
- `damperopt.psd` provides `compute_psd(signal, dt, f_min, f_max)`, a
  Blackman-windowed autocorrelation estimate of the power spectral density.
  It also provides `clamp`.
- `damperopt.road_profile` provides `RoadProfile`. `RoadProfile.generate`
  builds a smoothed random road. The `displacement(t, delay)` and
  `velocity(t, delay)` methods sample it at step `t`, shifted by `delay`
  seconds and clamped to the ends of the profile.

## Limitations

- Results are only printed. Nothing is saved to a file, and there is no
  plotting.
- The damper model covers compression and rebound damping, blow-off and a
  digressive knee. It does not model hysteresis or damper temperature.
- Without `--seed`, the road and the search are random, so two runs give
  different results.