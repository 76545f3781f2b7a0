import uvicorn

if __name__ == "__main__":
    print("Starting Königsberg Bridges API...")
    print("Docs available at: http://localhost:8000/docs")

    uvicorn.run(
        "konigsberg.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
