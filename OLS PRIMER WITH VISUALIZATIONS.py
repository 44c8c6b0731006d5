print("""
=============================================================================
OLS PRIMER: ARRAYS, LEAST SQUARES AND MEASUREMENT ERROR (WITH VISUALIZATIONS)
=============================================================================
Sections
--------
  0.  Array basics -- indexing, ranges, bounds checking
  1.  OLS -- simulate, estimate, confidence interval
  2.  Measurement error -- attenuation bias

Uses only: numpy, pandas, scipy, matplotlib
Estimators come from the methods/ package.
=============================================================================
""")
import os

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from methods import indexing, ols, measurement_error as me
from methods.errors import OutOfBoundsError
from methods.simulate import simulate_linear_model

SEED = 42
save = True
plt.rcParams.update({
    "figure.facecolor": "#FAFAFA", "axes.facecolor": "#FAFAFA",
    "axes.edgecolor": "#333", "axes.labelcolor": "#222",
    "xtick.color": "#555", "ytick.color": "#555", "text.color": "#222",
    "font.size": 10, "axes.titlesize": 12, "axes.titleweight": "bold",
    "axes.grid": True, "grid.alpha": 0.25, "grid.color": "#AAA", "figure.dpi": 140,
})
CB, CO, CG, CR, CP = "#2171B5", "#E6550D", "#31A354", "#DE2D26", "#756BB1"

OUTDIR = os.path.dirname(os.path.abspath(__file__))


def savefig(fig, name):
    fig.savefig(os.path.join(OUTDIR, name), bbox_inches="tight", dpi=150); plt.close(fig)


# =============================================================================
# 0. Array basics
# =============================================================================
section0_text = """\
Section 0: Array basics -- indexing, ranges, bounds checking

Python sequences and numpy arrays are 0-based: the first element of a
length-n array is a[0] and the last is a[n-1]. Two conveniences hide
mistakes:
  a[-1]    wraps around to the last element
  a[2:99]  silently truncates to a[2:n]
The methods.indexing helpers refuse both and raise OutOfBoundsError.

Ranges are lazy: range(1, 6) stores start, stop and step, not the five
numbers. closed_range(1, 5) is the inclusive version; collect() turns a
range into an array when the numbers are actually needed.
"""
print(section0_text)

a = indexing.collect(indexing.closed_range(10, 50, 10))
print(f"a = collect(closed_range(10, 50, 10)) = {a.tolist()}")
print(f"  checked_get(a, 0) = {indexing.checked_get(a, 0)}")
print(f"  checked_get(a, 4) = {indexing.checked_get(a, 4)}")
for bad in (5, -1):
    try:
        indexing.checked_get(a, bad)
    except OutOfBoundsError as e:
        print(f"  checked_get(a, {bad}) -> OutOfBoundsError: {e}")
try:
    indexing.checked_slice(a, 2, 99)
except OutOfBoundsError as e:
    print(f"  checked_slice(a, 2, 99) -> OutOfBoundsError: {e}")
b = indexing.replace(a, 0, -10)
print(f"  replace(a, 0, -10) = {b.tolist()}; a is still {a.tolist()}")

# =============================================================================
# 1. OLS
# =============================================================================
section1_text = """\
Section 1: OLS -- Ordinary Least Squares

Mathematical setup
y = X*beta + epsilon, with X the n-by-k design matrix (first column all
ones), beta the k-vector of coefficients. The OLS estimate solves the
normal equations
  (X'X) beta_hat = X'y
which needs X to have full column rank. In code we solve them through a
pivoted QR decomposition of X rather than by inverting X'X: same answer
on well-posed problems, and rank deficiency is detected explicitly
(SingularMatrixError) instead of producing garbage.

  Residuals:          e_hat = y - X*beta_hat
  Residual variance:  sigma_hat^2 = e_hat'e_hat / (n - k)
  Covariance:         Var(beta_hat) = sigma_hat^2 * (X'X)^{-1}
  95% Wald interval:  beta_hat_j +/- 1.96 * SE_j

The notebook version divided by n instead of n - k; the two differ by
the factor n / (n - k), which is about 2% when n = 100 and k = 2.
"""
print(section1_text)

rng = np.random.default_rng(SEED)
data = simulate_linear_model(n=100, beta=(5.0, 2.0), sigma=1.0, rng=rng)
X, y = data["X"], data["y"]
res = ols.fit(X, y)
res_pop = ols.fit(X, y, dof_correction=False)
table = pd.DataFrame(
    {"true": data["beta"], "coef": res["beta"], "se": res["se"],
     "ci_lo": res["ci_lo"], "ci_hi": res["ci_hi"]},
    index=["const", "x"],
)
print(table.round(4).to_string())
print(f"\nsigma_hat^2: e'e/(n-k) = {res['s2']:.4f}   e'e/n = {res_pop['s2']:.4f}")

X_dup = np.column_stack([X, 2 * X[:, 1]])
try:
    ols.estimate(X_dup, y)
except np.linalg.LinAlgError as e:
    print(f"Collinear design -> {type(e).__name__}: {e}")

fig, axes = plt.subplots(1, 2, figsize=(11, 4.5))
ax = axes[0]
ax.scatter(X[:, 1], y, alpha=.5, s=14, c=CB, edgecolors="none")
xl = np.linspace(0, 1, 100)
ax.plot(xl, res["beta"][0] + res["beta"][1] * xl, c=CO, lw=2.5,
        label=f"OLS: y_hat = {res['beta'][0]:.2f}+{res['beta'][1]:.2f}x")
ax.plot(xl, 5 + 2 * xl, c=CG, lw=2, ls="--", label="True: y = 5+2x")
ax.set_xlabel("x"); ax.set_ylabel("y"); ax.set_title("A) OLS Fit vs True"); ax.legend(fontsize=8)

ax = axes[1]
ax.scatter(res["fitted"], res["residuals"], alpha=.5, s=14, c=CP, edgecolors="none")
ax.axhline(0, color=CR, lw=1.5, ls="--")
ax.set_xlabel("Fitted y_hat"); ax.set_ylabel("Residuals e_hat"); ax.set_title("B) Residuals vs Fitted")
fig.suptitle("Section 1: OLS", fontsize=14, y=1.03); fig.tight_layout()
if save:
    savefig(fig, "fig01_ols.png")

# =============================================================================
# 2. Measurement error
# =============================================================================
section2_text = """\
Section 2: Measurement Error -- Attenuation Bias

Suppose we only observe x_obs = x + u, where u is noise independent of
x and epsilon. Regressing y on x_obs gives
  plim beta_hat = beta * Var(x) / (Var(x) + Var(u))
The ratio lambda = Var(x) / (Var(x) + Var(u)) is the reliability ratio;
it lies in (0, 1], so the slope is biased toward zero.

A practical pitfall: adding the noise in place, X[:, 1] += u, destroys
the clean data you wanted to compare against. add_measurement_error()
always works on a copy, and the estimators take their inputs read-only.
"""
print(section2_text)

sigma_u = 0.3
me_res = me.estimate_with_measurement_error(X, y, column=1, sigma=sigma_u, rng=rng)
print(f"Clean slope: {me_res['beta_clean'][1]:.4f}")
print(f"Noisy slope: {me_res['beta_noisy'][1]:.4f}")
print(f"Attenuation: {me_res['attenuation']:.3f}  (reliability ratio {me_res['predicted']:.3f})")
print(f"Original X unchanged: {np.array_equal(X, data['X'])}")

sigmas = np.linspace(0, 0.8, 9)
mc_means = []
for s in sigmas:
    mc = me.monte_carlo_attenuation(500, 200, s, seed=SEED)
    mc_means.append(np.mean(mc["mc_noisy"]))
    print(f"  sigma_u = {s:.1f}: mean noisy slope = {mc_means[-1]:.3f}  predicted = {mc['predicted']:.3f}")

fig, axes = plt.subplots(1, 2, figsize=(11, 4.5))
ax = axes[0]
ax.scatter(X[:, 1], y, alpha=.4, s=14, c=CB, edgecolors="none", label="true x")
ax.scatter(me_res["X_noisy"][:, 1], y, alpha=.4, s=14, c=CO, edgecolors="none", label="x + u")
xl = np.linspace(X[:, 1].min() - 0.5, X[:, 1].max() + 0.5, 100)
ax.plot(xl, me_res["beta_clean"][0] + me_res["beta_clean"][1] * xl, c=CB, lw=2)
ax.plot(xl, me_res["beta_noisy"][0] + me_res["beta_noisy"][1] * xl, c=CO, lw=2)
ax.set_xlabel("regressor"); ax.set_ylabel("y"); ax.set_title("A) Clean vs Noisy Fit"); ax.legend(fontsize=8)

ax = axes[1]
lam = np.array([me.reliability_ratio(1 / 12, s ** 2) for s in sigmas])
ax.plot(sigmas, mc_means, "o-", c=CO, lw=2, label="Monte Carlo mean")
ax.plot(sigmas, 2 * lam, c=CG, lw=2, ls="--", label="2 x reliability ratio")
ax.axhline(2, color=CR, lw=1, ls=":")
ax.set_xlabel("sigma_u"); ax.set_ylabel("slope estimate"); ax.set_title("B) Attenuation vs Noise")
ax.legend(fontsize=8)
fig.suptitle("Section 2: Measurement Error", fontsize=14, y=1.03); fig.tight_layout()
if save:
    savefig(fig, "fig02_measurement_error.png")
    print("Done! 2 PNGs written to", OUTDIR)
else:
    print("Done!")
