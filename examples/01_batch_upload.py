"""
Upload a batch of files in chunks
"""
import asyncio
from chunkpy import UploadClient, TransportConfig, UploadConfig, ChunkTransmissionError


async def main():
    config = TransportConfig(base_url="http://127.0.0.1:8000")
    
    async with UploadClient(config, upload_config=UploadConfig(chunk_size=5 * 1024 * 1024)) as client:
        
        # Select files (order is upload order)
        client.add_files("video.mp4", "report.pdf")
        client.add_bytes("notes.txt", b"uploaded from memory")
        
        # Events
        client.on('file_combined', lambda session: print(f"Combined: {session.url}"))
        client.on('combine_failed', lambda session, error: print(f"Not combined: {error}"))
        
        # Upload with progress callback
        def on_progress(progress):
            print(f"Progress: {progress.overall_percent}% ({progress.file_name})")
        
        try:
            result = await client.upload(progress_callback=on_progress)
        except ChunkTransmissionError as e:
            print(f"Aborted on {e.file_name}, chunk {e.chunk_index}")
            return
        
        print(f"Batch {result.status.value}: {len(result.completed)}/{result.total_files} files")


if __name__ == "__main__":
    asyncio.run(main())
