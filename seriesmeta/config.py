# Copyright (c) MONAI Consortium
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#     http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    SERIESMETA_DICOMWEB_URL: str = ""
    SERIESMETA_DICOMWEB_USERNAME: str = ""
    SERIESMETA_DICOMWEB_PASSWORD: str = ""
    SERIESMETA_QIDO_PREFIX: str = ""
    SERIESMETA_WADO_PREFIX: str = ""

    SERIESMETA_PROVIDER_CACHE_SIZE: int = 1000000
    SERIESMETA_WORKERS: int = 1
    SERIESMETA_SUV_ENABLED: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
