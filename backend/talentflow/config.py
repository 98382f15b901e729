from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "TalentFlow"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # Simulated remote service: latency drawn uniformly from [min, max) ms.
    simulate_faults: bool = True
    latency_min_ms: int = 200
    latency_max_ms: int = 1200
    read_error_rate: float = 0.05
    write_error_rate: float = 0.10

    seed_on_startup: bool = True
    seed_candidate_count: int = 1000
    seed_random_seed: int | None = None

    jobs_default_page_size: int = 10
    candidates_default_page_size: int = 50
    max_page_size: int = 1000

    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def db_path(self) -> Path:
        return self.data_path / "db.sqlite"

    model_config = {"env_prefix": "TALENTFLOW_"}


settings = Settings()
