# load experiment config from yaml

import yaml
import os


DATA_KEYS = ['map_file', 'control_file', 'gt_file', 'observation_dir']


def load_config(config_path):
    # load and validate config file
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"config not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    _validate_config(config)
    _resolve_data_paths(config, os.path.dirname(os.path.abspath(config_path)))
    return config


def _validate_config(config):
    # check required fields are present
    if not isinstance(config, dict):
        raise ValueError("config must be a mapping")

    required = ['experiment', 'data', 'sensors']
    for field in required:
        if field not in config:
            raise ValueError(f"missing {field} in config")

    if 'name' not in (config['experiment'] or {}):
        raise ValueError("missing experiment.name in config")

    for key in DATA_KEYS:
        if key not in (config['data'] or {}):
            raise ValueError(f"missing data.{key} in config")

    sensors = config['sensors'] or {}
    for name, key in (('gps', 'sigma'), ('odometry', 'sigma_pos'),
                      ('odometry', 'delta_t'), ('landmark', 'sigma')):
        if key not in (sensors.get(name) or {}):
            raise ValueError(f"missing sensors.{name}.{key} in config")

    if len(sensors['gps']['sigma']) != 3:
        raise ValueError("gps sigma needs [x, y, theta]")

    if len(sensors['odometry']['sigma_pos']) != 3:
        raise ValueError("odometry sigma_pos needs [x, y, theta]")

    if sensors['odometry']['delta_t'] <= 0:
        raise ValueError("odometry delta_t must be positive")

    sigma_lm = sensors['landmark']['sigma']
    if len(sigma_lm) != 2 or min(sigma_lm) <= 0:
        raise ValueError("landmark sigma needs 2 positive values")

    fcfg = config.get('filter') or {}
    if int(fcfg.get('num_particles', 100)) <= 0:
        raise ValueError("num_particles must be positive")

    if fcfg.get('resampling', 'multinomial') not in ('multinomial', 'systematic'):
        raise ValueError(f"unknown resampling scheme: {fcfg['resampling']}")


def _resolve_data_paths(config, base_dir):
    # data and output paths are relative to the config file
    for key in DATA_KEYS:
        path = config['data'][key]
        if not os.path.isabs(path):
            config['data'][key] = os.path.normpath(os.path.join(base_dir, path))

    output_dir = config.get('output_dir') or 'results'
    if not os.path.isabs(output_dir):
        output_dir = os.path.normpath(os.path.join(base_dir, output_dir))
    config['output_dir'] = output_dir


def get_output_paths(config, algorithm_name):
    # generate output file paths
    exp_name = config['experiment']['name']
    output_dir = config.get('output_dir', 'results')
    os.makedirs(output_dir, exist_ok=True)

    return {
        'estimate_file': os.path.join(output_dir, f"{algorithm_name}_estimate_{exp_name}.csv"),
    }


def print_config_summary(config):
    # print experiment setup
    fcfg = config.get('filter') or {}
    sensors = config['sensors']
    print(f"Experiment: {config['experiment']['name']}")
    if 'description' in config['experiment']:
        print(f"  {config['experiment']['description']}")
    print(f"\nFilter Configuration:")
    print(f"  Particles: {fcfg.get('num_particles', 100)}")
    print(f"  Resampling: {fcfg.get('resampling', 'multinomial')}")
    print(f"  Sensor range: {fcfg.get('sensor_range', 50.0)} m (filtering {'on' if fcfg.get('filter_by_range', False) else 'off'})")
    print(f"\nSensor Configuration:")
    print(f"  GPS sigma: {sensors['gps']['sigma']}")
    print(f"  Odometry sigma_pos: {sensors['odometry']['sigma_pos']}, dt={sensors['odometry']['delta_t']} s")
    print(f"  Landmark sigma: {sensors['landmark']['sigma']}")
    print(f"Random seed: {config.get('random_seed', 42)}")
