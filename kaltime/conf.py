from functools import wraps

from dateutil import tz

default_settings = {
    # None means the system timezone, as reported by tzlocal
    "LOCAL_TIMEZONE": None,
    "OFFSET_RESOLUTION": "system",
    "AMBIGUOUS_LOCAL_TIME": "earlier",
    "TIMESPAN_SEPARATOR": "..",
}


class Settings:
    """Control how partial time strings are resolved.

    Attributes mirror the keys of ``default_settings``:

    ``LOCAL_TIMEZONE``
        Name of the timezone treated as the system-local zone. When unset the
        zone reported by :func:`tzlocal.get_localzone` is used.

    ``OFFSET_RESOLUTION``
        ``'system'`` resolves wall-clock times against the local timezone
        database (DST-aware). ``'reference'`` reuses the reference's raw UTC
        offset without any DST lookup.

    ``AMBIGUOUS_LOCAL_TIME``
        What to do with a wall-clock time that occurs twice: ``'earlier'``,
        ``'later'`` or ``'raise'``.

    ``TIMESPAN_SEPARATOR``
        Token splitting a timespan into its start and stop expressions.
    """

    _default = True
    _mod_settings = dict()

    def __init__(self, settings=None):
        if settings:
            self._updateall(settings.items())
        else:
            self._updateall(default_settings.items())

    def _updateall(self, iterable):
        for key, value in iterable:
            setattr(self, key, value)

    def replace(self, mod_settings=None, **kwds):
        for x in default_settings.keys():
            kwds.setdefault(x, getattr(self, x))

        kwds["_default"] = False
        if mod_settings:
            kwds["_mod_settings"] = mod_settings

        return self.__class__(settings=kwds)

    def __repr__(self):
        return "{}({})".format(
            self.__class__.__name__,
            ", ".join("{}={!r}".format(k, getattr(self, k)) for k in default_settings),
        )


settings = Settings()


def apply_settings(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        mod_settings = kwargs.get("settings")

        kwargs["settings"] = mod_settings or settings

        if isinstance(kwargs["settings"], dict):
            kwargs["settings"] = settings.replace(
                mod_settings=mod_settings, **kwargs["settings"]
            )

        if not isinstance(kwargs["settings"], Settings):
            raise TypeError(
                "settings can only be either dict or instance of Settings class"
            )

        return f(*args, **kwargs)

    return wrapper


class SettingValidationError(ValueError):
    pass


def _check_timezone_name(setting_name, setting_value):
    if tz.gettz(setting_value) is None:
        raise SettingValidationError(
            '"{}" is not a known timezone for "{}"'.format(setting_value, setting_name)
        )


def _check_separator(setting_name, setting_value):
    if not setting_value:
        raise SettingValidationError('"{}" cannot be empty'.format(setting_name))


def check_settings(settings):
    """
    Check if provided settings are valid, if not it raises `SettingValidationError`.
    Only checks for the modified settings.
    """
    settings_values = {
        "LOCAL_TIMEZONE": {
            "type": str,
            "extra_check": _check_timezone_name,
        },
        "OFFSET_RESOLUTION": {
            "values": ("system", "reference"),
            "type": str,
        },
        "AMBIGUOUS_LOCAL_TIME": {
            "values": ("earlier", "later", "raise"),
            "type": str,
        },
        "TIMESPAN_SEPARATOR": {
            "type": str,
            "extra_check": _check_separator,
        },
    }

    modified_settings = settings._mod_settings  # check only modified settings

    for setting_name, setting_value in modified_settings.items():
        setting_type = type(setting_value)
        setting_props = settings_values.get(setting_name)

        if not setting_props:
            raise SettingValidationError(
                '"{}" is not a valid setting'.format(setting_name)
            )

        # LOCAL_TIMEZONE may be reset to None explicitly
        if setting_value is None and setting_name == "LOCAL_TIMEZONE":
            continue

        setting_allowed_type = setting_props["type"]
        if not isinstance(setting_value, setting_allowed_type):
            raise SettingValidationError(
                '"{}" must be "{}", not "{}".'.format(
                    setting_name, setting_allowed_type.__name__, setting_type.__name__
                )
            )

        setting_allowed_values = setting_props.get("values")
        if setting_allowed_values and setting_value not in setting_allowed_values:
            raise SettingValidationError(
                '"{}" is not a valid value for "{}", it should be: "{}" or "{}"'.format(
                    setting_value,
                    setting_name,
                    '", "'.join(setting_allowed_values[:-1]),
                    setting_allowed_values[-1],
                )
            )

        extra_check = setting_props.get("extra_check")
        if extra_check:
            extra_check(setting_name, setting_value)
