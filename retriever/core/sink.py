from pathlib import Path

from retriever.core.job import OutputLocation, SourceFile
from retriever.utils.logger import setup_logger

class FileSink:
    """Writes source files to base_path/<chain>/<address>/<path>"""
    
    def __init__(self, base_path: Path):
        self.base_path = Path(base_path)
        self.logger = setup_logger('retriever.sink')
    
    def write(self, chain: str, relative_path: str, content: str) -> Path:
        """Create parent directories and overwrite the target file"""
        if Path(relative_path).is_absolute():
            raise ValueError(f"Refusing absolute source path: {relative_path}")
        
        output_file = OutputLocation(self.base_path, chain, relative_path).path
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(content, encoding='utf-8')
        self.logger.info(f"Saved: {output_file}")
        return output_file
    
    def save(self, source: SourceFile) -> Path:
        return self.write(source.chain, source.path, source.content)
