from unittest.mock import patch

from fairlaunch_core.common.config import CurveConfig
from fairlaunch_core.main import main, parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert args.config is None
    assert args.host == "127.0.0.1"
    assert args.port == 5000


@patch("fairlaunch_core.main.create_app")
def test_main_serves_configured_curve(mock_create_app, tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("curve:\n  max_price_impact_bps: 2000\n", encoding="utf-8")

    main(["--config", str(path), "--port", "8080"])

    mock_create_app.assert_called_once_with(CurveConfig(max_price_impact_bps=2000))
    mock_create_app.return_value.run.assert_called_once_with(host="127.0.0.1", port=8080)
