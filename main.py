import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from scanfill.config import AppConfig


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Preenchimento de polígonos ET/AET com extrusão 3D"
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="Arquivo YAML de configuração")
    parser.add_argument("--log-level", default=None,
                        help="Nível de log (sobrescreve o da configuração)")
    return parser.parse_args(argv)


def load_config(path: Optional[Path]) -> AppConfig:
    if path is None:
        return AppConfig()
    return AppConfig.from_yaml(path)


def main(argv=None):
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        setup_logging("INFO")
        logging.getLogger(__name__).error("Configuração inválida: %s", e)
        return 1

    setup_logging(args.log_level or config.log_level)

    # Qt só depois da configuração: erros de config não abrem janela
    from PyQt5.QtWidgets import QApplication
    from scanfill.widgets import MainWindow

    app = QApplication(sys.argv[:1])
    win = MainWindow(config)
    win.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
