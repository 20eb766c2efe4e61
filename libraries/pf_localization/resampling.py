## importance resampling, returns indices into the current particle set

import numpy as np

from .errors import WeightDegeneracyError


## normalize weights into a probability vector
def normalize_weights(weights):
    weights = np.asarray(weights, dtype=np.float64)

    if np.any(np.isnan(weights)):
        raise WeightDegeneracyError(float('nan'), "NaN in particle weights")
    if np.any(weights < 0):
        raise ValueError("particle weights must be non-negative")

    w_sum = weights.sum()
    if not np.isfinite(w_sum) or w_sum <= 0:
        # all zero (or underflow) - no distribution to draw from
        raise WeightDegeneracyError(float(w_sum))

    return weights / w_sum


def _draw(probs, u):
    # clip to the last particle with mass, cumsum round-off can end below 1.0
    cum_w = np.cumsum(probs)
    last = np.flatnonzero(probs)[-1]
    return np.minimum(np.searchsorted(cum_w, u, side='right'), last)


def multinomial_resample(weights, n, rng):
    ## n independent draws with replacement, P(i) = w_i / sum(w)
    probs = normalize_weights(weights)
    r = rng.uniform(0.0, 1.0, n)
    return _draw(probs, r)


## low variance sampling to reduce sampling error
def systematic_resample(weights, n, rng):
    probs = normalize_weights(weights)

    # one random start, then evenly spaced pointers
    r = rng.uniform(0.0, 1.0 / n)
    u = r + np.arange(n) / n
    return _draw(probs, u)


RESAMPLERS = {
    'multinomial': multinomial_resample,
    'systematic': systematic_resample,
}


def get_resampler(name):
    try:
        return RESAMPLERS[name]
    except KeyError:
        raise ValueError(f"unknown resampling scheme {name!r}, expected one of {sorted(RESAMPLERS)}") from None
