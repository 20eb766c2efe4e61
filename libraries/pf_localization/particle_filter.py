'''
Particle filter for 2-D pose localization against a known landmark map.

A cycle runs init once, then prediction -> update_weights -> resample for
every timestep. Particles are plain records mutated in place by the first
two stages; resample replaces the whole list.
'''

import copy

import numpy as np

from .errors import EmptyMapError, FilterNotInitializedError
from .motion_model import YAW_RATE_EPSILON, sample_motion_model
from .noise_models import GaussianNoiseModel
from .observation_model import match_observations, observation_weight, observations_in_range
from .resampling import get_resampler, normalize_weights


class Particle:
    def __init__(self, x, y, theta, weight=1.0, id=0):
        self.id = id
        self.x = x
        self.y = y
        self.theta = theta       # not normalized to [-pi, pi]
        self.weight = weight
        # diagnostics, only written by set_associations
        self.associations = []
        self.sense_x = []
        self.sense_y = []

    @property
    def pose(self):
        return (self.x, self.y, self.theta)

    def __repr__(self):
        return f"Particle(id={self.id}, x={self.x:.3f}, y={self.y:.3f}, theta={self.theta:.3f}, weight={self.weight:.3g})"


class ParticleFilter:

    def __init__(self, num_particles=100, noise=None, resampling='multinomial',
                 sensor_range=None, filter_by_range=False, yaw_rate_epsilon=YAW_RATE_EPSILON):
        if int(num_particles) <= 0:
            raise ValueError(f"num_particles must be positive, got {num_particles}")

        self.num_particles = int(num_particles)
        self.noise = noise if noise is not None else GaussianNoiseModel()
        self.resampling = resampling
        self._resampler = get_resampler(resampling)
        self.sensor_range = sensor_range
        self.filter_by_range = filter_by_range
        self.yaw_rate_epsilon = yaw_rate_epsilon

        self.particles = []
        self.weights = np.zeros(0)
        self.is_initialized = False

    @classmethod
    def from_config(cls, config, noise=None):
        fcfg = config.get('filter') or {}
        if noise is None:
            noise = GaussianNoiseModel.from_config(config)
        return cls(num_particles=fcfg.get('num_particles', 100),
                   noise=noise,
                   resampling=fcfg.get('resampling', 'multinomial'),
                   sensor_range=fcfg.get('sensor_range', 50.0),
                   filter_by_range=fcfg.get('filter_by_range', False),
                   yaw_rate_epsilon=fcfg.get('yaw_rate_epsilon', YAW_RATE_EPSILON))

    def _require_initialized(self, stage):
        if not self.is_initialized:
            raise FilterNotInitializedError(f"{stage}() called before init()")

    def init(self, x, y, theta, std):
        '''
        Seed num_particles particles around (x, y, theta) with per-axis
        gaussian std (std_x, std_y, std_theta); every weight starts at 1.0.
        Replaces any existing particle set.
        '''
        poses = self.noise.sample_poses((x, y, theta), std, self.num_particles)

        self.particles = [Particle(float(px), float(py), float(ptheta), 1.0, id=i)
                          for i, (px, py, ptheta) in enumerate(poses)]
        self.weights = np.zeros(0)
        self.is_initialized = True

    def prediction(self, delta_t, std_pos, velocity, yaw_rate):
        '''
        Move every particle by one control step (velocity, yaw_rate) over
        delta_t, then add gaussian noise with std_pos on x, y, theta.
        '''
        self._require_initialized('prediction')

        poses = np.array([p.pose for p in self.particles])
        noise = self.noise.pose_noise(std_pos, len(self.particles))
        new_poses = sample_motion_model(poses, delta_t, velocity, yaw_rate, noise,
                                        eps=self.yaw_rate_epsilon)

        for p, (px, py, ptheta) in zip(self.particles, new_poses):
            p.x = float(px)
            p.y = float(py)
            p.theta = float(ptheta)

    def _usable_observations(self, observations, sensor_range=None):
        observations = np.asarray(observations, dtype=np.float64).reshape(-1, 2)
        if not self.filter_by_range:
            return observations

        if sensor_range is None:
            sensor_range = self.sensor_range
        if sensor_range is None:
            raise ValueError("filter_by_range is on but no sensor_range was given")
        return observations_in_range(observations, sensor_range)

    def update_weights(self, sensor_range, std_landmark, observations, landmark_map):
        '''
        Weight each particle by how well its view of the observations lines
        up with the map: product over observations of the gaussian
        likelihood against the nearest landmark.

        Returns the new weight vector (also kept on self.weights).
        '''
        self._require_initialized('update_weights')
        if len(landmark_map) == 0:
            raise EmptyMapError("cannot weight particles against an empty landmark map")

        std_landmark = np.asarray(std_landmark, dtype=np.float64)
        if std_landmark.shape != (2,) or np.any(std_landmark <= 0):
            raise ValueError(f"std_landmark needs two positive values, got {std_landmark.tolist()}")

        observations = self._usable_observations(observations, sensor_range)

        for p in self.particles:
            p.weight = observation_weight(p.pose, observations, std_landmark, landmark_map)

        self.weights = np.array([p.weight for p in self.particles])
        return self.weights

    def resample(self):
        '''
        Draw a new generation of num_particles particles with replacement,
        with probability proportional to weight. Raises
        WeightDegeneracyError when the weights have no usable mass.
        '''
        self._require_initialized('resample')
        if len(self.weights) != len(self.particles):
            raise FilterNotInitializedError("resample() called before update_weights()")

        idx = self._resampler(self.weights, self.num_particles, self.noise.rng)

        ## deep copy so repeated picks do not share association lists
        self.particles = [copy.deepcopy(self.particles[i]) for i in idx]

        # uniform weights after resampling, vector stays index-aligned
        for p in self.particles:
            p.weight = 1.0
        self.weights = np.array([p.weight for p in self.particles])
        return idx

    def set_associations(self, particle, associations, sense_x, sense_y):
        # overwrite the diagnostic fields, no effect on filtering
        particle.associations = list(associations)
        particle.sense_x = list(sense_x)
        particle.sense_y = list(sense_y)

    def get_associations(self, particle):
        return ' '.join(str(a) for a in particle.associations)

    def get_sense_coord(self, particle, coord):
        coord = coord.upper()
        if coord == 'X':
            values = particle.sense_x
        elif coord == 'Y':
            values = particle.sense_y
        else:
            raise ValueError(f"coord must be 'X' or 'Y', got {coord!r}")
        return ' '.join(f"{v:g}" for v in values)

    def associate(self, particle, observations, landmark_map, sensor_range=None):
        '''
        Landmark ids and map-frame coordinates this particle matches the
        observations to, in the form set_associations takes.
        '''
        if len(landmark_map) == 0:
            raise EmptyMapError("cannot associate against an empty landmark map")

        observations = self._usable_observations(observations, sensor_range)
        map_points, idx = match_observations(particle.pose, observations, landmark_map)

        ids = [landmark_map[i].id for i in idx]
        return ids, map_points[:, 0].tolist(), map_points[:, 1].tolist()

    def best_particle(self):
        self._require_initialized('best_particle')
        # max() keeps the first particle on ties
        return max(self.particles, key=lambda p: p.weight)

    def mean_pose(self):
        self._require_initialized('mean_pose')
        probs = normalize_weights([p.weight for p in self.particles])

        mean_x = sum(p.x * w for p, w in zip(self.particles, probs))
        mean_y = sum(p.y * w for p, w in zip(self.particles, probs))

        # circular mean for theta (handles wraparound)
        sin_theta = sum(np.sin(p.theta) * w for p, w in zip(self.particles, probs))
        cos_theta = sum(np.cos(p.theta) * w for p, w in zip(self.particles, probs))
        mean_theta = np.arctan2(sin_theta, cos_theta)
        return float(mean_x), float(mean_y), float(mean_theta)

    def effective_sample_size(self):
        self._require_initialized('effective_sample_size')
        probs = normalize_weights([p.weight for p in self.particles])
        return float(1.0 / np.sum(probs**2))
