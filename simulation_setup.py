# heat_domain/simulation_setup.py

import numpy as np
from typing import Dict, Any, Tuple, Optional

from core.grid import GridMapper
from core.field import FieldState
from physics import domains, distributions, drivers, boundaries
from analysis.colors import color_scheme_registry, field_representations

backend_names = ('cpu', 'parallel', 'gpu')

def _validate_configs(params: Dict[str, Any]):
    is_quiet = params.get('quiet_mode', False)
    if not is_quiet: print("--- 驗證配置信息 ---")

    config_map = {
        'domain_config_name': (domains.domain_configs, "區域形狀"),
        'initial_condition_config_name': (distributions.initial_condition_configs, "初始條件"),
        'boundary_condition': (boundaries.boundary_condition_registry_cpu.keys(), "边界条件"),
        'color_scheme': (color_scheme_registry, "配色方案"),
        'field_rep': (field_representations, "場的表示方式"),
        'backend': (backend_names, "后端"),
    }
    for name, (registry, desc) in config_map.items():
        if params.get(name) not in registry:
            raise ValueError(f"错误: {desc}配置 '{params.get(name)}' 不存在。可用: {list(registry)}")

    shape = domains.domain_configs[params['domain_config_name']]['provider']
    if shape in domains.parametrized_shapes:
        if params.get('shape_driver_config_name') not in drivers.shape_driver_configs:
            raise ValueError(f"错误: 形狀驅動配置 '{params.get('shape_driver_config_name')}' 不存在。"
                             f"可用: {list(drivers.shape_driver_configs)}")

    for key in ('nx', 'ny'):
        if int(params.get(key, 0)) < 3:
            raise ValueError(f"错误: 網格尺寸 {key} = {params.get(key)} 太小，至少需要 3。")
    if params['x_max'] <= params['x_min']:
        raise ValueError(f"错误: x_max ({params['x_max']}) 必須大於 x_min ({params['x_min']})。")
    for key in ('dt', 'viscosity'):
        if params.get(key, 0) <= 0:
            raise ValueError(f"错误: {key} 必須為正數，目前為 {params.get(key)}。")

    if not is_quiet: print("配置验证通过。")

def _load_domain_config(params: Dict[str, Any]) -> Dict[str, Any]:
    conf = domains.domain_configs[params['domain_config_name']]
    params['domain_shape'] = conf['provider']
    params['domain_args'] = dict(conf.get('args', {}))
    return params

def _setup_grid(params: Dict[str, Any]) -> GridMapper:
    return GridMapper(params['nx'], params['ny'], params['x_min'], params['x_max'],
                      params['y_min'], params['y_max'])

def _setup_driver(params: Dict[str, Any]) -> Optional[drivers.DomainDriver]:
    if params['domain_shape'] not in domains.parametrized_shapes:
        return None
    return drivers.DomainDriver(params['shape_driver_config_name'], params['num_frames'],
                                params['domain_shape'], params['domain_args'])

def _setup_field(params: Dict[str, Any], grid: GridMapper, driver) -> FieldState:
    is_quiet = params.get('quiet_mode', False)
    if not is_quiet: print("--- 初始化熱場 ---")

    shape_params = driver.parameters_at(0) if driver is not None else None
    if driver is not None:
        driver.current = shape_params
        if not is_quiet: print(f"  [區域] Julia 參數: {shape_params.describe()}")
    classifier = domains.make_classifier(params['domain_shape'], params['domain_args'], shape_params)

    dtype = np.float64 if params.get('precision', 'float64') == 'float64' else np.float32
    field_state = FieldState(grid, classifier, params['t_in'], params['t_out'], dtype=dtype)

    ic_conf = distributions.initial_condition_configs[params['initial_condition_config_name']]
    provider = distributions.initial_condition_registry[ic_conf['provider']]
    X, Y = grid.meshgrid()
    field_state.initialize_from(provider(X, Y, **ic_conf.get('args', {})))

    if not is_quiet:
        n_interior = int(np.count_nonzero(field_state.interior_mask()))
        print(f"  [區域] 形狀 '{params['domain_shape']}'，內部格點數: {n_interior}")
    return field_state

def setup_simulation_environment(params: Dict[str, Any]) -> Tuple[FieldState, Optional[drivers.DomainDriver], Dict[str, Any]]:
    is_quiet = params.get('quiet_mode', False)
    _validate_configs(params)
    params = _load_domain_config(params)

    grid = _setup_grid(params)
    intstep = params['dt'] / (grid.dx * grid.dx * params['viscosity'])
    params['intstep'] = intstep
    if not is_quiet:
        print(f"Integration step {intstep:.3g}")
        if intstep > 0.25:
            print(f"警告：積分步長 {intstep:.3g} 超過顯式格式的穩定上限 0.25，結果可能發散。")

    driver = _setup_driver(params)
    field_state = _setup_field(params, grid, driver)
    return field_state, driver, params
