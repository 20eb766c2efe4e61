"""
Particle Filter Localization Package
"""

from .particle_filter import (
    Particle,
    ParticleFilter
)

from .errors import (
    FilterNotInitializedError,
    EmptyMapError,
    WeightDegeneracyError
)

from .geometry import (
    wrap_angle,
    rotation_matrix,
    transform_to_map,
    angle_difference
)

from .map_loader import (
    load_map,
    Landmark,
    LandmarkMap
)

from .data_format import (
    load_control_data,
    load_gt_data,
    load_observations,
    save_estimates,
    compute_error_metrics
)

from .motion_model import predict_pose

from .association import nearest_landmarks, find_nearest_landmark

from .observation_model import gaussian_likelihood

from .resampling import multinomial_resample, systematic_resample

from .noise_models import GaussianNoiseModel

from .config_loader import load_config

from .runner import run_filter

__version__ = "1.0.0"
__all__ = [
    # Filter
    'Particle',
    'ParticleFilter',
    'FilterNotInitializedError',
    'EmptyMapError',
    'WeightDegeneracyError',
    # Geometry
    'wrap_angle',
    'rotation_matrix',
    'transform_to_map',
    'angle_difference',
    # Map
    'load_map',
    'Landmark',
    'LandmarkMap',
    # Data
    'load_control_data',
    'load_gt_data',
    'load_observations',
    'save_estimates',
    'compute_error_metrics',
    # Models
    'predict_pose',
    'nearest_landmarks',
    'find_nearest_landmark',
    'gaussian_likelihood',
    'multinomial_resample',
    'systematic_resample',
    # Noise
    'GaussianNoiseModel',
    # Config
    'load_config',
    # Driver
    'run_filter',
]
