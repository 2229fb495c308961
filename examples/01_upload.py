"""
Upload files with presets, callbacks and progress
"""
import asyncio
from blobpanel import (
    BlobPanel,
    MemoryGateway,
    UploadRequest,
    UploadConstraints,
    ValidationError,
    setup_logging,
)


async def main():
    setup_logging()
    
    def on_success(result):
        print(f"Stored {result.original_file_name} at {result.remote_url}")
    
    def on_progress(value):
        print(f"Progress: {value}%")
    
    async with BlobPanel(
        MemoryGateway(store_delay=0.35),
        on_success=on_success,
        on_progress=on_progress
    ) as panel:
        
        # Documents go to documents/ with a 50 MB ceiling
        notes = UploadRequest.from_bytes("notes.txt", b"order #1042 shipped", "text/plain")
        await panel.upload(notes)
        
        # Rejected before any network call
        movie = UploadRequest.from_bytes("clip.mp4", b"\x00" * 64, "video/mp4")
        try:
            await panel.upload(movie)
        except ValidationError as e:
            print(f"Rejected ({e.kind.value}): {e}")
        
        # Batch: invalid files are skipped, the rest are stored together
        batch = [
            UploadRequest.from_bytes("a.png", b"png-a", "image/png"),
            UploadRequest.from_bytes("b.gif", b"gif-b", "image/gif"),
            UploadRequest.from_bytes("c.pdf", b"pdf-c", "application/pdf"),
        ]
        results = await panel.upload_files(
            batch, UploadConstraints(destination_folder="gallery")
        )
        print(f"Batch stored {len(results)} of {len(batch)} files")


if __name__ == "__main__":
    asyncio.run(main())
