"""
List, filter, inspect, sign and delete stored files
"""
import asyncio
from blobpanel import BlobPanel, MemoryGateway, UploadRequest
from blobpanel.core.utils import filter_entries, format_file_size


async def main():
    async with BlobPanel(MemoryGateway(), signing_secret="change-me") as panel:
        await panel.upload(UploadRequest.from_bytes("report.pdf", b"%PDF-1.7", "application/pdf"))
        await panel.upload(UploadRequest.from_bytes("logo.png", b"\x89PNG", "image/png"))
        
        entries = await panel.list_files()
        for entry in entries:
            print(f"{entry.path:50} {format_file_size(entry.size_bytes):>10}")
        
        pdfs = filter_entries(entries, category="pdf")
        print(f"PDFs: {[e.name for e in pdfs]}")
        
        meta = await panel.info(pdfs[0].url)
        print(f"{meta.name}: {meta.content_type}, uploaded {meta.uploaded_at:%Y-%m-%d}")
        
        print(f"Signed: {panel.sign_url(meta.path, expires_in=600)}")
        
        deleted = await panel.delete_many([e.url for e in entries])
        print(f"Deleted {deleted} files, {len(panel.files)} left")


if __name__ == "__main__":
    asyncio.run(main())
