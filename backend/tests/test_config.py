import backend.config as config


def test_log_level_accepts_known_names():
    assert config._parse_log_level("debug") == "DEBUG"
    assert config._parse_log_level(" Warning ") == "WARNING"


def test_log_level_falls_back_to_info():
    assert config._parse_log_level("VERBOSE") == "INFO"
    assert config._parse_log_level("") == "INFO"
    assert config._parse_log_level(None) == "INFO"
    assert config._parse_log_level("15") == "INFO"


def test_limit_falls_back_on_bad_values():
    assert config._parse_limit("25", 100) == 25
    assert config._parse_limit("0", 100) == 100
    assert config._parse_limit("many", 100) == 100
