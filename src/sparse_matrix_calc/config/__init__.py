from sparse_matrix_calc.config.calculator_config import CalculatorConfig, load_calculator_config, default_config_path

__all__ = [
    "CalculatorConfig",
    "load_calculator_config",
    "default_config_path",
]
