import os
import sys
import hydra
import uvicorn
from omegaconf import DictConfig

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from trafficpulse.common.config import ConfigManager
from trafficpulse.dashboard.presentation.api import create_app

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    print("Configuration loaded.")

    app_cfg = ConfigManager.structure(cfg)
    app = create_app(app_cfg)

    server_cfg = app_cfg.server
    print(f"Starting server at http://{server_cfg.host}:{server_cfg.port}")
    uvicorn.run(app, host=server_cfg.host, port=server_cfg.port)

if __name__ == "__main__":
    main()
