import pytest

from signconvert.config import ConverterConfig


class TestDefaults:
    def test_media_stream_constraints(self):
        assert ConverterConfig().media_stream_constraints() == {
            "video": {
                "width": {"ideal": 1280},
                "height": {"ideal": 720},
                "facingMode": "user",
            },
            "audio": False,
        }

    def test_defaults(self):
        cfg = ConverterConfig()
        assert cfg.copy_window == 2.0
        assert cfg.max_records is None
        assert cfg.placeholder_text == "Hello, how are you?"
        assert cfg.ice_servers == [{"urls": ["stun:stun.l.google.com:19302"]}]

    def test_ice_servers_are_not_shared(self):
        a, b = ConverterConfig(), ConverterConfig()
        a.ice_servers.append({"urls": ["stun:example.org"]})
        assert len(b.ice_servers) == 1

    @pytest.mark.parametrize("kwargs", [
        {"copy_window": 0},
        {"acquire_timeout": -1},
        {"max_records": 0},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            ConverterConfig(**kwargs)


class TestFromEnv:
    def test_empty_env_gives_defaults(self):
        assert ConverterConfig.from_env({}) == ConverterConfig()

    def test_reads_converter_variables(self):
        cfg = ConverterConfig.from_env({
            "CONVERTER_PLACEHOLDER_TEXT": "Thank you",
            "CONVERTER_COPY_WINDOW": "3.5",
            "CONVERTER_ACQUIRE_TIMEOUT": "10",
            "CONVERTER_MAX_RECORDS": "50",
            "CONVERTER_LOG_LEVEL": "debug",
            "CONVERTER_STUN_URLS": "stun:a.example:3478, stun:b.example:3478",
        })

        assert cfg.placeholder_text == "Thank you"
        assert cfg.copy_window == 3.5
        assert cfg.acquire_timeout == 10.0
        assert cfg.max_records == 50
        assert cfg.log_level == "DEBUG"
        assert cfg.ice_servers == [{"urls": ["stun:a.example:3478", "stun:b.example:3478"]}]

    def test_bad_number_raises(self):
        with pytest.raises(ValueError):
            ConverterConfig.from_env({"CONVERTER_MAX_RECORDS": "lots"})

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("CONVERTER_MAX_RECORDS", "5")
        assert ConverterConfig.from_env().max_records == 5
