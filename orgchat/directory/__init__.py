from orgchat.directory.base import DirectoryGateway
from orgchat.directory.cache import CachingDirectory
from orgchat.directory.memory import InMemoryDirectory
from orgchat.directory.yaml_store import OrgFile, YamlDirectory, load_org

__all__ = [
    "CachingDirectory",
    "DirectoryGateway",
    "InMemoryDirectory",
    "OrgFile",
    "YamlDirectory",
    "load_org",
]
