## noise source for the filter
## gaussian draws for particle seeding, process noise, and resampling


import numpy as np


def _check_std(std, size):
    std = np.asarray(std, dtype=np.float64)
    if std.shape != (size,):
        raise ValueError(f"expected {size} standard deviations, got {std.shape}")
    if np.any(std < 0) or not np.all(np.isfinite(std)):
        raise ValueError(f"standard deviations must be finite and >= 0, got {std.tolist()}")
    return std


class GaussianNoiseModel:

    def __init__(self, seed=None):
        self.seed = seed
        self.rng = np.random.RandomState(seed)  ## one generator for the whole run

    @classmethod
    def from_config(cls, config):
        return cls(config.get('random_seed', 42))

    def sample_poses(self, mean_pose, std, count):
        ## count independent (x, y, theta) draws around mean_pose
        std = _check_std(std, 3)
        return self.rng.normal(np.asarray(mean_pose, dtype=np.float64), std, size=(count, 3))

    def pose_noise(self, std_pos, count):
        ## zero-mean process noise, one row per particle
        std_pos = _check_std(std_pos, 3)
        return self.rng.normal(0.0, std_pos, size=(count, 3))
