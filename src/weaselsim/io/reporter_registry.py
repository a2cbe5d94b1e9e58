# Creates Reporters from the 'reporting' section of the config

from weaselsim.io.reporter import ConsoleReporter, HistoryReporter


class ReporterRegistry:
    """Registry for all available reporters."""
    _reporters = {
        'console': ConsoleReporter,
        'history': HistoryReporter,
    }

    @classmethod
    def get(cls, name, **params):
        if not isinstance(name, str):
            raise ValueError(f"Reporter type must be a string, got {name!r}")
        reporter_name = name.lower()

        if reporter_name in cls._reporters:
            try:
                return cls._reporters[reporter_name](**params)
            except TypeError as e:
                raise ValueError(f"Bad parameters for reporter '{name}': {e}")

        raise ValueError(f"Unknown reporter: {name}. Available: {list(cls._reporters.keys())}")

    @classmethod
    def get_reporters(cls, conf, **params):
        """Initialize reporters based on configuration."""
        reporters = []
        for r_conf in conf.get('reporting', []):
            if not isinstance(r_conf, dict) or not isinstance(r_conf.get('type'), str):
                raise ValueError(f"Reporter entry needs a string 'type': {r_conf!r}")
            r_params = dict(r_conf.get('params') or {})
            if 'interval' in r_conf:
                r_params['interval'] = r_conf['interval']
            # Console output can be redirected by the caller (e.g. the UI)
            if r_conf['type'].lower() == 'console' and 'stream' in params:
                r_params['stream'] = params['stream']
            reporters.append(cls.get(r_conf['type'], **r_params))
        return reporters
