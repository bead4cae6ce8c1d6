from livremele.cli import main

raise SystemExit(main())
